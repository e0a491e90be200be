"""Example: dual-axis chart built by hand on a styled figure."""

import newsroom_plots as nrp

df = nrp.load_sample()
total = df.groupby("date")["revenue"].sum()
subs = df[df["series"] == "Subscriptions"].set_index("date")["share"]

fig, ax1 = nrp.figure()

color_total = nrp.COLOR_CYCLE[0]
color_share = nrp.COLOR_CYCLE[1]

ax1.plot(total.index, total.to_numpy(), color=color_total, label="Total revenue")
ax1.yaxis.set_major_formatter(nrp.currency(prefix="$", scale=1e-6, suffix="M", accuracy=0.01).ticker())
ax1.set_ylabel("Total revenue")
ax1.set_title("Subscriptions carry a growing share", loc="left")

ax2 = ax1.twinx()
ax2.plot(subs.index, subs.to_numpy(), color=color_share, linestyle="--", label="Subscription share")
ax2.yaxis.set_major_formatter(nrp.percent(accuracy=1).ticker())
ax2.set_ylabel("Subscription share")
ax2.spines["right"].set_visible(True)
ax2.spines["right"].set_color(nrp.COLORS["border"])
ax2.spines["right"].set_linewidth(nrp.LAYOUT["spine_width"])

# Combined legend
lines1, labels1 = ax1.get_legend_handles_labels()
lines2, labels2 = ax2.get_legend_handles_labels()
ax1.legend(lines1 + lines2, labels1 + labels2, loc="upper left")

nrp.save(fig, "figure-escape-hatch.svg")
