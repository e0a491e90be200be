"""Example: start from a base theme and override single elements."""

import newsroom_plots as nrp

df = nrp.load_sample()
latest = df[df["date"] == df["date"].max()]

plot = (
    nrp.ggplot(latest, nrp.aes("series", "revenue", fill="series"))
    + nrp.geom_col(width=0.6)
    + nrp.geom_label(nrp.aes(label="revenue"), format=nrp.currency(prefix="$", accuracy=1), vjust=0, nudge_y=4000)
    + nrp.scale_fill_palette("okabe_ito")
    + nrp.scale_y_continuous(labels=nrp.comma(), expand=nrp.expansion(mult=(0, 0.15)))
    + nrp.labs(title="December 2023 revenue", x="Source", y="Dollars")
    + nrp.theme_classic()
    + nrp.theme(
        legend_position="none",
        plot_title=nrp.element_text(size=16, weight="bold", hjust=0.0, margin=nrp.margin(b=12)),
        axis_text_x=nrp.element_text(angle=30, hjust=1.0, size=9),
        panel_grid_major_y=nrp.element_line(color=nrp.COLORS["grey85"], linewidth=0.5),
    )
)

nrp.save(plot, "custom-theme.svg")
