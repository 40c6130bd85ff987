"""CLI interface for ObfusCalc"""

import click
from click.core import ParameterSource
import json
import sys
from functools import wraps
from pathlib import Path
from typing import Optional
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from obfuscalc import __version__
from obfuscalc.calculator import ParameterCalculator
from obfuscalc.command import parse_command
from obfuscalc.config import (
    BOGUS_PERCENTAGE_RANGE,
    COMMAND_DEFAULTS,
    LEVEL_ORDER,
    MIN_CYCLES,
    SEARCH_CONFIG,
    get_config,
)
from obfuscalc.demo import QuickDemo
from obfuscalc.exceptions import ObfusCalcError
from obfuscalc.models import Configuration, Level
from obfuscalc.report import ReportPrinter
from obfuscalc.sources import load_configuration, save_configuration


def configuration_options(func):
    """Options shared by every command that evaluates one configuration"""
    @click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
                  help="YAML or JSON preset; explicit options override it")
    @click.option("--level", "-l", help=f"Obfuscation level ({', '.join(LEVEL_ORDER)}; "
                                        f"unknown values fall back to medium)")
    @click.option("--cycles", "-c", type=click.IntRange(min=MIN_CYCLES), help="Obfuscation cycles")
    @click.option("--bogus", "-b", type=click.IntRange(*BOGUS_PERCENTAGE_RANGE), help="Bogus code percentage")
    @click.option("--string-encryption/--no-string-encryption", default=False,
                  help="Encrypt string literals")
    @click.option("--fake-looks/--no-fake-looks", default=False, help="Insert fake loops")
    @wraps(func)
    def wrapper(config_path, level, cycles, bogus, string_encryption, fake_looks, **kwargs):
        ctx = click.get_current_context()
        # Flags left at their default must not override the preset
        if ctx.get_parameter_source("string_encryption") is ParameterSource.DEFAULT:
            string_encryption = None
        if ctx.get_parameter_source("fake_looks") is ParameterSource.DEFAULT:
            fake_looks = None
        try:
            config = build_configuration(config_path, level, cycles, bogus,
                                         string_encryption, fake_looks)
        except ObfusCalcError as e:
            click.echo(f"[ERROR] {e}")
            sys.exit(1)
        return func(config=config, **kwargs)
    return wrapper


def build_configuration(config_path: Optional[str], level: Optional[str], cycles: Optional[int],
                        bogus: Optional[int], string_encryption: Optional[bool],
                        fake_looks: Optional[bool]) -> Configuration:
    """Merge a preset file (if any) with command-line overrides"""
    config = load_configuration(config_path) if config_path else Configuration()

    changes = {}
    if level is not None:
        changes["level"] = Level.coerce(level)
    if cycles is not None:
        changes["cycles"] = cycles
    if bogus is not None:
        changes["bogus_percentage"] = bogus
    if string_encryption is not None:
        changes["string_encryption"] = string_encryption
    if fake_looks is not None:
        changes["fake_looks"] = fake_looks

    return config.with_changes(**changes)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def main(verbose: bool):
    """ObfusCalc - Obfuscation parameter calculator

    Estimates instruction counts, complexity, security and performance
    overhead for an obfuscation configuration. All figures are heuristic.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@main.command()
@configuration_options
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.option("--export-md", type=click.Path(dir_okay=False), help="Export report as Markdown file")
@click.option("--save-config", type=click.Path(dir_okay=False),
              help="Save the effective configuration as a YAML/JSON preset")
def calculate(config: Configuration, as_json: bool, export_md: Optional[str],
              save_config: Optional[str]):
    """Calculate metrics and recommendations for a configuration"""
    result = ParameterCalculator().analyze(config)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        ReportPrinter().print_report(result)

    if export_md:
        ReportPrinter().export_markdown(result, Path(export_md))
        click.echo(f"[OK] Exported Markdown to: {export_md}")

    if save_config:
        try:
            save_configuration(config, save_config)
        except ObfusCalcError as e:
            click.echo(f"[ERROR] {e}")
            sys.exit(1)
        click.echo(f"[OK] Saved configuration to: {save_config}")


@main.command()
@click.option("--target-security", default=SEARCH_CONFIG["target_security"], type=int,
              show_default=True, help="Minimum security score")
@click.option("--max-time-impact", default=SEARCH_CONFIG["max_time_impact"], type=float,
              show_default=True, help="Maximum execution-time overhead (%)")
@click.option("--json", "as_json", is_flag=True, help="Print result as JSON")
def optimal(target_security: int, max_time_impact: float, as_json: bool):
    """Find the first configuration meeting security and performance targets"""
    found = ParameterCalculator().find_optimal(target_security, max_time_impact)

    if as_json:
        click.echo(json.dumps(found.to_dict() if found else None, indent=2))
        return

    ReportPrinter().print_optimal(found, target_security, max_time_impact)


@main.command()
@configuration_options
@click.option("--output", "output_file", type=click.Path(dir_okay=False),
              help="Write export JSON to this file instead of stdout")
@click.option("--tool", default=COMMAND_DEFAULTS["tool"], show_default=True,
              help="Obfuscator executable name")
@click.option("--input-path", default=COMMAND_DEFAULTS["input"], show_default=True,
              help="Input bitcode path used in the command")
@click.option("--output-path", default=COMMAND_DEFAULTS["output"], show_default=True,
              help="Output path used in the command")
def export(config: Configuration, output_file: Optional[str], tool: str,
           input_path: str, output_path: str):
    """Export configuration, metrics and the obfuscator command line"""
    data = ParameterCalculator().export_configuration(
        config, tool=tool, input_path=input_path, output_path=output_path
    )
    content = json.dumps(data, indent=2)

    if output_file:
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(content)
        click.echo(f"[OK] Export saved to: {output_file}")
    else:
        click.echo(content)


@main.command(name="parse-command")
@click.argument("command")
def parse_command_cmd(command: str):
    """Parse an obfuscator command line back into a configuration"""
    try:
        config = parse_command(command)
    except ObfusCalcError as e:
        click.echo(f"[ERROR] {e}")
        sys.exit(1)
    click.echo(json.dumps(config.to_dict(), indent=2))


@main.command()
@configuration_options
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
def demo(config: Configuration, as_json: bool):
    """Run the quick demo (simplified figures, legacy security score)"""
    report = QuickDemo().run(config)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        ReportPrinter().print_demo(report)


@main.command()
@click.option("--bogus", "-b", default=SEARCH_CONFIG["bogus_percentage"],
              type=click.IntRange(*BOGUS_PERCENTAGE_RANGE),
              show_default=True, help="Bogus code percentage")
@click.option("--string-encryption/--no-string-encryption", default=True, show_default=True)
@click.option("--fake-looks/--no-fake-looks", default=True, show_default=True)
@click.option("--max-cycles", default=5, type=click.IntRange(min=MIN_CYCLES), show_default=True)
def sweep(bogus: int, string_encryption: bool, fake_looks: bool, max_cycles: int):
    """Evaluate every level for cycles 1..MAX_CYCLES"""
    calculator = ParameterCalculator()
    results = []
    for level in Level.ordered():
        for cycles in range(1, max_cycles + 1):
            config = Configuration(level=level, cycles=cycles, bogus_percentage=bogus,
                                   string_encryption=string_encryption, fake_looks=fake_looks)
            results.append(calculator.analyze(config))

    ReportPrinter().print_sweep(results)


@main.command(name="show-config")
def show_config():
    """Print the lookup tables and thresholds as JSON"""
    click.echo(json.dumps(get_config(), indent=2))


if __name__ == "__main__":
    main()
