"""Example: revenue by source, labeled at the line ends instead of a legend."""

import newsroom_plots as nrp

df = nrp.load_sample()

plot = (
    nrp.ggplot(df, nrp.aes("date", "revenue", color="series"))
    + nrp.geom_line()
    + nrp.geom_text(
        nrp.aes(label="series"),
        data=nrp.last_points("series", "date"),
        hjust=0,
        nudge_x=20,
    )
    + nrp.scale_x_date(date_breaks="1 year", date_labels="%Y", expand=nrp.expansion(mult=(0.02, 0.18)))
    + nrp.scale_y_continuous(
        labels=nrp.currency(prefix="$", scale=0.001, suffix="K", accuracy=0),
        limits=(0, None),
        expand=nrp.expansion(mult=(0, 0.05)),
    )
    + nrp.labs(
        title="Subscriptions overtook advertising in 2020",
        subtitle="Monthly revenue by source",
        caption="Source: finance desk",
        x=None,
        y="Revenue",
    )
    + nrp.theme(legend_position="none", axis_title_x=nrp.element_blank())
)

nrp.save(plot, "revenue-by-source.svg")
