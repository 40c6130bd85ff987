"""Build and parse the obfuscator command line"""

import shlex
from typing import List, Optional

import click

from obfuscalc.config import COMMAND_DEFAULTS
from obfuscalc.exceptions import CommandParseError
from obfuscalc.models import Configuration, Level


def generate_command(config: Configuration, tool: str = COMMAND_DEFAULTS["tool"],
                     input_path: str = COMMAND_DEFAULTS["input"],
                     output_path: str = COMMAND_DEFAULTS["output"]) -> str:
    """
    Render the command line that would run the obfuscator with config.

    Flags always appear as -i, -o, -l, -c, -b, then --string-encryption and
    --fake-looks only when enabled. Tool and paths are shell-quoted so
    parse_command() reads them back unchanged.
    """
    command = f"./{shlex.quote(tool)} -i {shlex.quote(input_path)} -o {shlex.quote(output_path)}"
    command += f" -l {config.level.value}"
    command += f" -c {config.cycles}"
    command += f" -b {config.bogus_percentage}"
    if config.string_encryption:
        command += " --string-encryption"
    if config.fake_looks:
        command += " --fake-looks"
    return command


# Parser mirrors the obfuscator's own options; never invoked, only parsed.
_OBFUSCATOR_COMMAND = click.Command(
    name=COMMAND_DEFAULTS["tool"],
    params=[
        click.Option(["-i", "--input", "input_path"], default=COMMAND_DEFAULTS["input"]),
        click.Option(["-o", "--output", "output_path"], default=COMMAND_DEFAULTS["output"]),
        click.Option(["-l", "--level", "level"], default=Level.MEDIUM.value),
        click.Option(["-c", "--cycles", "cycles"], type=int, default=1),
        click.Option(["-b", "--bogus", "bogus_percentage"], type=int, default=15),
        click.Option(["--string-encryption", "string_encryption"], is_flag=True, default=False),
        click.Option(["--fake-looks", "fake_looks"], is_flag=True, default=False),
    ],
    add_help_option=False,
)


def _split(command: str) -> List[str]:
    try:
        return shlex.split(command)
    except ValueError as e:
        raise CommandParseError(f"Cannot tokenize command: {e}") from e


def parse_command(command: str, tool: Optional[str] = None) -> Configuration:
    """
    Parse a command produced by generate_command() back into a Configuration.

    Args:
        command: Full command line, including the program name
        tool: Expected program name (any name accepted if None)

    Returns:
        Configuration with flag presence mapped to True

    Raises:
        CommandParseError: If the command is empty or has unknown/invalid options
    """
    tokens = _split(command)
    if not tokens:
        raise CommandParseError("Empty command")

    program, args = tokens[0], tokens[1:]
    if tool is not None and program.rsplit("/", 1)[-1] != tool:
        raise CommandParseError(f"Unexpected program {program!r}, expected {tool!r}")

    try:
        ctx = _OBFUSCATOR_COMMAND.make_context(program, args)
    except click.ClickException as e:
        raise CommandParseError(e.format_message()) from e

    params = ctx.params
    return Configuration(
        level=Level.coerce(params["level"]),
        cycles=params["cycles"],
        bogus_percentage=params["bogus_percentage"],
        string_encryption=params["string_encryption"],
        fake_looks=params["fake_looks"],
    )
