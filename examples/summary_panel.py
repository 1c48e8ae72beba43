"""
Summary Panel Example

This example demonstrates how to create a unit's status summary panel using
the StatusCharts package. It builds a small synthetic metric table and
abundance series in memory, then draws the four metric charts and the
timeline status grid on one page.

Output: PNG files in output/ showing a non-cyclic unit (moving average) and a
cyclic unit (dominant cycle years highlighted), plus a standalone timeline.
"""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from status_charts import (
    Config,
    ConfigurationError,
    RenderError,
    create_summary_panel,
    create_timeline_chart,
)


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


def synthetic_abundance(first_year: int, last_year: int, cyclic: bool, seed: int = 7) -> pd.DataFrame:
    """Spawner abundance with noise, optionally with a strong 4-year cycle."""
    rng = np.random.default_rng(seed)
    years = np.arange(first_year, last_year + 1)
    base = np.linspace(6000, 2500, len(years)) * rng.lognormal(0, 0.25, len(years))
    if cyclic:
        base = np.where((years - first_year) % 4 == 0, base * 12, base)
    return pd.DataFrame({"Year": years, "Escapement_Wild": base.round()})


def synthetic_metrics(abundance: pd.DataFrame, first_year: int, lbm: float, ubm: float) -> pd.DataFrame:
    """Metric table with trend, percent change and status columns."""
    table = abundance[abundance["Year"] >= first_year].copy()
    values = table["Escapement_Wild"].to_numpy()
    long_term = abundance["Escapement_Wild"].expanding().mean().loc[table.index].to_numpy()
    table["LongTrend"] = (100 * values / long_term).round(1)
    table["PercChange"] = (100 * (values / values[0] - 1)).round(1)
    
    def status(value):
        if value < lbm:
            return "Red"
        if value <= ubm:
            return "Amber"
        return "Green"
    
    table["RelLBM.Status"] = [status(v) for v in values]
    table["RapidStatus.Status"] = table["RelLBM.Status"]
    table["RapidStatus.Confidence"] = ["High" if i % 3 else "Moderate" for i in range(len(table))]
    return table.drop(columns=["Escapement_Wild"])


config = Config(default_dpi=120)
output_dir = Path("output")

units = [
    {
        "CU_Name": "Example Lake (non-cyclic)",
        "RelAbd_LBM": 2000, "RelAbd_UBM": 4500,
        "LongTrend_LBM": 0.5, "LongTrend_UBM": 0.75,
        "PercChange_LBM": -25, "PercChange_UBM": -15,
        "AvGen": 4, "DomCycleYear": "NA",
        "DataQualkIdx": "Rel_Idx",
    },
    {
        "CU_Name": "Example River (cyclic)",
        "AbsAbd_LBM": 1500, "AbsAbd_UBM": 10000,
        "RelAbd_LBM": 2000, "RelAbd_UBM": 4500,
        "LongTrend_LBM": 0.5, "LongTrend_UBM": 0.75,
        "AvGen": 4, "DomCycleYear": 1992,
        "DataQualkIdx": "Abs_Abd",
    },
]

for index, attributes in enumerate(units):
    cyclic = attributes["DomCycleYear"] != "NA"
    abundance = synthetic_abundance(1980, 2020, cyclic=cyclic, seed=index)
    metrics = synthetic_metrics(abundance, 1995, attributes["RelAbd_LBM"], attributes["RelAbd_UBM"])
    output_path = output_dir / f"summary_panel_{'cyclic' if cyclic else 'noncyclic'}.png"
    
    print(f"Creating summary panel for {attributes['CU_Name']}")
    try:
        saved = create_summary_panel(
            metrics,
            abundance,
            attributes,
            output_path=output_path,
            config=config,
            metric_start_year=1995,
        )
        print(f"  Success! Panel saved to: {saved}")
    except ConfigurationError as e:
        print(f"  Input tables are not usable: {e}")
    except RenderError as e:
        print(f"  Rendering failed: {e}")

# A standalone timeline with custom rows
timeline_path = create_timeline_chart(
    metrics,
    metrics=[
        {"label": "Rapid", "dataCol": "RapidStatus.Status", "font": "bold"},
        {"label": "Confidence", "dataCol": "RapidStatus.Confidence", "font": "italic"},
    ],
    title="Rapid Status",
    output_path=output_dir / "timeline.png",
    config=config,
)
print(f"Timeline saved to: {timeline_path}")


# ============================================================================
# Interactive Display (Optional)
# ============================================================================

# Uncomment the following section to display the panel interactively
# instead of saving to file:

"""
import matplotlib.pyplot as plt

fig = create_summary_panel(metrics, abundance, units[-1])
plt.show()
"""
