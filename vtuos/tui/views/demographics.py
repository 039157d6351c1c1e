"""
VT-UOS Population Console - Demographics View
Renders a DemographicsReport: age bands, sex balance, workforce,
year-by-year projection and the viability verdict
"""

from typing import Optional

from rich.text import Text

from vtuos.population.demographics import AGE_BANDS, DemographicsReport
from vtuos.tui.layout import Align, ColumnSpec, content_width, side_by_side
from vtuos.tui.styles import Theme, get_theme
from vtuos.tui.table import Table

BAND_LABELS = {
    "infants": "Infants (0-2)",
    "children": "Children (3-12)",
    "adolescents": "Adolescents (13-17)",
    "young_adults": "Young adults (18-25)",
    "adults": "Adults (26-45)",
    "middle_aged": "Middle-aged (46-65)",
    "seniors": "Seniors (66+)",
}

PROJECTION_COLUMNS = [
    ColumnSpec("Year", 4, priority=5),
    ColumnSpec("Population", 10, Align.RIGHT, priority=4),
    ColumnSpec("Births", 6, Align.RIGHT, priority=2),
    ColumnSpec("Deaths", 6, Align.RIGHT, priority=3),
    ColumnSpec("Net", 5, Align.RIGHT, priority=1),
]

LABEL_WIDTH = 22
MIN_WIDTH = 40


class DemographicsView:
    """Demographics screen for one precomputed report."""

    def __init__(self, report: DemographicsReport, theme: Optional[Theme] = None):
        self.report = report
        self.theme = theme or get_theme()

    def render(self, width: int, max_width: int = 0) -> Text:
        width = content_width(width, MIN_WIDTH, max_width)
        t = self.theme
        r = self.report

        out = Text()
        out.append("=== DEMOGRAPHICS ===", style=t.title)
        out.append(f"\nAs of {r.as_of.isoformat()}\n\n", style=t.secondary)

        out.append("POPULATION STATUS\n", style=t.header)
        out.append(
            f"Active {r.stats.total_active}  Deceased {r.stats.total_deceased}  "
            f"Exiled {r.stats.total_exiled}  Surface {r.stats.on_mission}  "
            f"Quarantine {r.stats.quarantined}  Total {r.stats.total}\n\n",
            style=t.primary,
        )

        out.append_text(self.render_age_bands(width))
        out.append("\n")
        out.append(side_by_side(self.sex_block(), self.workforce_block(), width), style=t.primary)
        out.append("\n\n")
        out.append_text(self.render_projection(width))
        out.append("\n")
        out.append_text(self.render_viability())
        return out

    def render_age_bands(self, width: int) -> Text:
        t = self.theme
        age = self.report.age
        bar_width = max(width - LABEL_WIDTH - 8, 10)

        out = Text()
        out.append("AGE DISTRIBUTION\n", style=t.header)
        for name, _ in AGE_BANDS:
            count = getattr(age, name)
            out.append(f"{BAND_LABELS[name]:<{LABEL_WIDTH}}", style=t.secondary)
            out.append(f"{count:>5} ", style=t.primary)
            out.append_text(t.progress_bar(count, age.total, bar_width))
            out.append("\n")
        out.append(
            f"Median age {age.median_age:.1f}  Average age {age.average_age:.1f}\n",
            style=t.primary,
        )
        return out

    def sex_block(self) -> str:
        sex = self.report.sex
        return "\n".join([
            "SEX RATIO",
            f"Male     {sex.male:>5}",
            f"Female   {sex.female:>5}",
            f"Male share {sex.male_ratio:.1%}",
        ])

    def workforce_block(self) -> str:
        w = self.report.workforce
        return "\n".join([
            "WORKFORCE",
            f"Working age (16-65)  {w.working_age:>5}",
            f"  In training        {w.training_age:>5}",
            f"  Full workforce     {w.full_workforce:>5}",
            f"Retired (66+)        {w.retirement_age:>5}",
            f"Dependents           {w.dependents:>5}",
            f"Dependency ratio     {w.dependency_ratio:>5.2f}",
        ])

    def render_projection(self, width: int) -> Text:
        t = self.theme
        projection = self.report.projection

        table = Table(PROJECTION_COLUMNS, visible_rows=len(projection.projections), theme=t)
        table.set_rows([
            [str(p.year), str(p.population), str(p.births), str(p.deaths), f"{p.net_change:+d}"]
            for p in projection.projections
        ])

        out = Text()
        out.append("POPULATION PROJECTION\n", style=t.header)
        out.append(
            f"Current {projection.current_population}  "
            f"Growth {projection.growth_rate:+.2f}%/yr\n",
            style=t.primary,
        )
        if table.empty:
            out.append("No projection years requested.\n", style=t.secondary)
        else:
            out.append_text(table.render(width))
            out.append("\n")
        return out

    def render_viability(self) -> Text:
        t = self.theme
        v = self.report.projection.viability

        out = Text()
        out.append("VIABILITY\n", style=t.header)
        if v.is_viable:
            out.append(f"VIABLE (minimum {v.minimum_viable})\n", style=t.success)
        elif v.years_to_mvp:
            out.append(
                f"NOT VIABLE - falls below {v.minimum_viable} in {v.years_to_mvp} years\n",
                style=t.error,
            )
        else:
            out.append(f"NOT VIABLE - below minimum {v.minimum_viable}\n", style=t.error)

        out.append("Concerns:\n", style=t.secondary)
        for concern in v.concerns:
            out.append(f"  * {concern}\n", style=t.warning)
        out.append("Recommendations:\n", style=t.secondary)
        for recommendation in v.recommendations:
            out.append(f"  * {recommendation}\n", style=t.primary)
        return out
