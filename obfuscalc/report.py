"""
Console and Markdown rendering of calculator results

The engine only returns raw numbers; this module formats them (thousands
separators, +x.y% overheads, security tier labels, impact bands).
"""

from pathlib import Path
from typing import List, Optional, Sequence
import logging

from obfuscalc.demo import DemoReport
from obfuscalc.models import AnalysisResult, OptimalSettings
from obfuscalc.performance import PerformanceEstimator
from obfuscalc.scoring import ScoreEvaluator

logger = logging.getLogger(__name__)

WIDTH = 72

RECOMMENDATION_MARKERS = {
    "warning": "[WARN]",
    "info": "[INFO]",
    "success": "[OK]",
    "error": "[ERROR]",
}


def format_count(value: int) -> str:
    return f"{value:,}"


def format_impact(value: float) -> str:
    return f"+{value:.1f}%"


class ReportPrinter:
    """Render AnalysisResults for a terminal or a Markdown file"""

    def __init__(self):
        self.scorer = ScoreEvaluator()
        self.performance = PerformanceEstimator()

    def render_report(self, result: AnalysisResult) -> List[str]:
        config = result.configuration
        metrics = result.metrics
        impact = metrics.performance_impact
        tier = self.scorer.security_tier(metrics.security_score)

        lines = ["=" * WIDTH, "Obfuscation Report".center(WIDTH), "=" * WIDTH]
        lines.append(f"  Level:                  {config.level.value.capitalize()}")
        lines.append(f"  Cycles:                 {config.cycles}")
        lines.append(f"  Bogus code:             {config.bogus_percentage}%")
        lines.append(f"  String encryption:      {'on' if config.string_encryption else 'off'}")
        lines.append(f"  Fake looks:             {'on' if config.fake_looks else 'off'}")
        lines.append("-" * WIDTH)
        lines.append(f"  Bogus instructions:     {format_count(metrics.bogus_instructions)}")
        lines.append(f"  Encrypted strings:      {format_count(metrics.encrypted_strings)}")
        lines.append(f"  Fake looks:             {format_count(metrics.fake_looks)}")
        lines.append(f"  Control-flow functions: {format_count(metrics.control_flow_functions)}")
        lines.append(f"  Complexity:             {metrics.complexity_score}%")
        lines.append(f"  Security score:         {metrics.security_score}/100 ({tier.label})")
        lines.append("-" * WIDTH)
        for name, value in impact.as_floats().items():
            band = self.performance.impact_band(value)
            lines.append(f"  {name.capitalize() + ' overhead:':<24}{format_impact(value):<10}{band.value}")

        patch = metrics.recommended_settings
        if not patch.is_empty:
            suggested = ", ".join(f"{key}={value}" for key, value in patch.to_dict().items())
            lines.append(f"  Suggested settings:     {suggested}")

        if result.needs_attention:
            lines.append("-" * WIDTH)
            lines.append("Recommendations")
            for rec in result.recommendations:
                lines.append(f"  {RECOMMENDATION_MARKERS[rec.kind.value]} {rec.message}")
                lines.append(f"      {rec.suggestion}")

        lines.append("=" * WIDTH)
        return lines

    def print_report(self, result: AnalysisResult):
        print("\n".join(self.render_report(result)))

    def print_optimal(self, optimal: Optional[OptimalSettings], target_security: int,
                      max_time_impact: float):
        print(f"Target: security >= {target_security}, time overhead <= {max_time_impact}%")
        if optimal is None:
            print("No configuration meets both criteria.")
            return
        config = optimal.configuration
        print(f"  Level:             {config.level.value}")
        print(f"  Cycles:            {config.cycles}")
        print(f"  Bogus code:        {config.bogus_percentage}%")
        print(f"  String encryption: {'on' if config.string_encryption else 'off'}")
        print(f"  Fake looks:        {'on' if config.fake_looks else 'off'}")
        print(f"  Security score:    {optimal.security_score}/100")
        print(f"  Time overhead:     {format_impact(optimal.time_impact)}")

    def print_demo(self, report: DemoReport):
        config = report.configuration
        impact = report.performance_impact
        print("=" * WIDTH)
        print("Quick Demo".center(WIDTH))
        print("=" * WIDTH)
        print(f"  Level:              {config.level.value.capitalize()}")
        print(f"  Cycles:             {config.cycles}")
        print(f"  Bogus instructions: {format_count(report.bogus_instructions)}")
        print(f"  Encrypted strings:  {report.encrypted_strings}")
        print(f"  Fake looks:         {report.fake_looks}")
        print(f"  Security score:     {report.security_score}/100")
        print(f"  Size / time / mem:  +{impact.size:.0f}% / +{impact.time:.0f}% / +{impact.memory:.0f}%")
        print("=" * WIDTH)

    def print_sweep(self, results: Sequence[AnalysisResult]):
        """Print one row per configuration"""
        print(f"{'Level':<8}{'Cyc':<5}{'Bogus':<10}{'CFF':<6}{'Cplx':<6}{'Sec':<6}"
              f"{'Size':<9}{'Time':<9}{'Mem':<9}{'Advice':<6}")
        print("-" * 74)
        for result in results:
            config = result.configuration
            metrics = result.metrics
            impact = metrics.performance_impact
            advice = ",".join(rec.kind.value[0].upper() for rec in result.recommendations) or "-"
            print(f"{config.level.value:<8}{config.cycles:<5}"
                  f"{format_count(metrics.bogus_instructions):<10}"
                  f"{metrics.control_flow_functions:<6}{metrics.complexity_score:<6}"
                  f"{metrics.security_score:<6}{format_impact(impact.size):<9}"
                  f"{format_impact(impact.time):<9}{format_impact(impact.memory):<9}{advice:<6}")
        print("-" * 74)
        print("Advice: W=warning, I=info, S=success, E=error")

    def export_markdown(self, result: AnalysisResult, output_path: Path) -> str:
        """Export a single report as Markdown"""
        config = result.configuration
        metrics = result.metrics
        tier = self.scorer.security_tier(metrics.security_score)

        md = []
        md.append("# Obfuscation Report")
        md.append("")
        md.append("## Configuration")
        md.append("")
        md.append("| Parameter | Value |")
        md.append("|-----------|-------|")
        md.append(f"| Level | {config.level.value} |")
        md.append(f"| Cycles | {config.cycles} |")
        md.append(f"| Bogus code | {config.bogus_percentage}% |")
        md.append(f"| String encryption | {'yes' if config.string_encryption else 'no'} |")
        md.append(f"| Fake looks | {'yes' if config.fake_looks else 'no'} |")
        md.append("")
        md.append("## Metrics")
        md.append("")
        md.append("| Metric | Value |")
        md.append("|--------|-------|")
        md.append(f"| Bogus instructions | {format_count(metrics.bogus_instructions)} |")
        md.append(f"| Encrypted strings | {format_count(metrics.encrypted_strings)} |")
        md.append(f"| Fake looks | {format_count(metrics.fake_looks)} |")
        md.append(f"| Control-flow functions | {format_count(metrics.control_flow_functions)} |")
        md.append(f"| Complexity | {metrics.complexity_score}% |")
        md.append(f"| Security | {metrics.security_score}/100 ({tier.label}) |")
        for name, value in metrics.performance_impact.as_floats().items():
            md.append(f"| {name.capitalize()} overhead | {format_impact(value)} |")
        md.append("")

        if result.needs_attention:
            md.append("## Recommendations")
            md.append("")
            for rec in result.recommendations:
                md.append(f"- **{rec.kind.value}**: {rec.message} {rec.suggestion}")
            md.append("")

        content = "\n".join(md)
        output_path = Path(output_path)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(content)

        logger.info(f"Exported Markdown report to {output_path}")
        return content
