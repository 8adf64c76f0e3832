"""Common chart styling utilities shared by the sprint charts."""

import logging

import matplotlib.pyplot as plt
import seaborn as sns

logger = logging.getLogger(__name__)


def set_chart_style(style="whitegrid", despine=True):
    """Set seaborn chart style."""
    sns.set_style(style)
    if despine:
        sns.despine()


def apply_sprint_axis_styling(ax, sprint_names, ylabel="Story points"):
    """Label the x axis with one tick per sprint, in data order.

    Args:
        ax: Matplotlib axis object
        sprint_names: Sprint names, one per plotted position
        ylabel: Label for the y axis
    """
    set_chart_style()
    ax.set_xlabel("Sprint", labelpad=20)
    ax.set_ylabel(ylabel, labelpad=10)

    # Ticks sit on the 0-indexed data positions so labels stay aligned
    ax.set_xticks(list(range(len(sprint_names))))
    ax.set_xticklabels(
        [str(name).strip() for name in sprint_names], rotation=70, size="small"
    )


def save_chart_with_styling(fig, output_file, title="Chart"):
    """Save chart with common styling and logging.

    Args:
        fig: Matplotlib figure object
        output_file: Output file path
        title: Chart title for logging
    """
    logger.info("Writing %s chart to %s", title, output_file)
    fig.savefig(output_file, bbox_inches="tight", dpi=300)
    plt.close(fig)
