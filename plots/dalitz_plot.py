"""
Dalitz plot of toy events written by generate_toys.py, with the model
projection on m12² overlaid on the event histogram.

    python generate_toys.py --amplitude bw --events 5000 --output rho.csv
    python plots/dalitz_plot.py rho.csv --amplitude bw
"""
import csv
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).resolve().parents[1]))

import numpy as np
import matplotlib.pyplot as plt

from generate_toys import VAR_NAMES, build_model, build_parser
from pdffit.kinematics import msq23_limits


# ---------- LOAD EVENTS ----------
def load_events(filename):
    columns = {name: [] for name in VAR_NAMES}
    with open(filename, newline="") as f:
        for row in csv.DictReader(f):
            for name in VAR_NAMES:
                columns[name].append(float(row[name]))
    return {name: np.array(values) for name, values in columns.items()}


# ---------- MAIN ----------
def main():
    parser = build_parser()
    parser.description = "Dalitz plot of generated toy events"
    parser.add_argument("input", help="CSV file from generate_toys.py")
    parser.add_argument("--bins", type=int, default=50, help="Histogram bins per axis")
    args = parser.parse_args()

    events = load_events(args.input)
    n_events = len(events["mSq12"])
    if n_events == 0:
        print(f"[ERROR] No events in {args.input}")
        return
    print(f"[Dalitz] Loaded {n_events} events")

    model = build_model(args)
    ps = model.phase_space
    range12 = (ps.msq_min(0), ps.msq_max(0))
    range13 = (ps.msq_min(1), ps.msq_max(1))

    fig, (ax2d, ax1d) = plt.subplots(1, 2, figsize=(14, 6))

    # ---------- 2D ----------
    counts = ax2d.hist2d(events["mSq12"], events["mSq13"], bins=args.bins,
                         range=[range12, range13], cmap="viridis", cmin=1)
    fig.colorbar(counts[3], ax=ax2d, label="Events")

    # Kinematic boundary
    s12 = np.linspace(*range12, 400)
    lower, upper = msq23_limits(s12, ps.m_mother, ps.m1, ps.m2, ps.m3)
    ax2d.plot(s12, ps.msq_sum - s12 - lower, "r--", linewidth=1.5, label="Kinematic limit")
    ax2d.plot(s12, ps.msq_sum - s12 - upper, "r--", linewidth=1.5)

    ax2d.set_xlabel(r"$m^2_{12}$ [GeV$^2$]", fontsize=12)
    ax2d.set_ylabel(r"$m^2_{13}$ [GeV$^2$]", fontsize=12)
    ax2d.set_title("Dalitz plot", fontsize=14)
    ax2d.legend(fontsize=10)

    # ---------- PROJECTION ----------
    hist, edges = np.histogram(events["mSq12"], bins=args.bins, range=range12)
    centres = 0.5 * (edges[1:] + edges[:-1])
    width = edges[1] - edges[0]
    ax1d.errorbar(centres, hist, yerr=np.sqrt(hist), fmt="ko", markersize=3, label="Toy events")

    x = np.linspace(*range12, 200)
    projection = np.array([model.project("mSq12", xi) for xi in x])
    ax1d.plot(x, projection * n_events * width, "r-", linewidth=2, label="Model projection")

    ax1d.set_xlabel(r"$m^2_{12}$ [GeV$^2$]", fontsize=12)
    ax1d.set_ylabel(f"Events / {width:.3f} GeV$^2$", fontsize=12)
    ax1d.legend(fontsize=10)
    ax1d.grid(alpha=0.3)

    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
