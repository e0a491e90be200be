"""Example: yearly share of revenue by source, as dodged bars."""

import newsroom_plots as nrp

df = nrp.load_sample()
df["year"] = df["date"].dt.year.astype(str)
yearly = df.groupby(["year", "series"], observed=True, as_index=False)["share"].mean()

nrp.bar(
    yearly,
    "year",
    "share",
    fill="series",
    title="Where the money comes from",
    ylabel="Share of revenue",
    filename="share-of-revenue.svg",
    theme=nrp.theme_minimal() + nrp.theme(legend_position="top"),
)
