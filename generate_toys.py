#!/usr/bin/env python3
"""
Toy event generator for three-body Dalitz plots.

Examples:
    python generate_toys.py --events 1000
    python generate_toys.py --amplitude bw --mass 0.77526 --width 0.1491 --seed 42 --output rho.csv
    python generate_toys.py --mother 5.27934 --daughters 0.493677 0.13957 0.13957 --events 200 --verbose
"""

import argparse
import csv
import logging

from pdffit import Decay3Body, Parameter, PhaseSpace, Sampler, Variable
from pdffit.amplitudes import BreitWigner, FlatAmplitude
from pdffit.logging_config import configure_logging

logger = logging.getLogger("generate_toys")

# D0 -> KS pi+ pi- (GeV)
DEFAULT_MOTHER = 1.86484
DEFAULT_DAUGHTERS = (0.497611, 0.13957, 0.13957)

VAR_NAMES = ("mSq12", "mSq13", "mSq23")


def build_model(args) -> Decay3Body:
    """Dalitz model described by the command-line arguments."""
    phase_space = PhaseSpace(args.mother, *args.daughters)

    if args.amplitude == "bw":
        amplitude = BreitWigner(
            args.channel,
            Parameter("mass", args.mass),
            Parameter("width", args.width),
            spin=args.spin,
        )
    else:
        amplitude = FlatAmplitude()

    return Decay3Body(*(Variable(name) for name in VAR_NAMES), amplitude, phase_space)


def export_events_to_csv(events, filename):
    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["event_id", *VAR_NAMES, "attempts"])
        for event_id, event in enumerate(events):
            writer.writerow([event_id, *(event.values[name] for name in VAR_NAMES), event.attempts])
    logger.info(f"Exported {len(events)} events to {filename}")


def build_parser():
    parser = argparse.ArgumentParser(
        description="Three-body Dalitz toy generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  python generate_toys.py --events 1000
  python generate_toys.py --amplitude bw --mass 0.77526 --width 0.1491 --output rho.csv""",
    )
    parser.add_argument("--mother", type=float, default=DEFAULT_MOTHER, help="Mother mass (default D0)")
    parser.add_argument("--daughters", type=float, nargs=3, default=DEFAULT_DAUGHTERS,
                        metavar=("M1", "M2", "M3"), help="Daughter masses (default KS pi pi)")
    parser.add_argument("--amplitude", choices=["flat", "bw"], default="flat", help="Decay amplitude")
    parser.add_argument("--channel", choices=["12", "13", "23"], default="23",
                        help="Resonance channel for --amplitude bw (default 23)")
    parser.add_argument("--mass", type=float, default=0.77526, help="Resonance mass")
    parser.add_argument("--width", type=float, default=0.1491, help="Resonance width")
    parser.add_argument("--spin", type=int, default=1, choices=[0, 1, 2], help="Resonance spin")
    parser.add_argument("--events", type=int, default=10, help="Number of events (default 10)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (optional)")
    parser.add_argument("--output", type=str, help="Export generated events to CSV file")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main():
    args = build_parser().parse_args()
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    model = build_model(args)
    logger.info(f"{model.phase_space}, amplitude {model.amplitude.name}")
    logger.info(f"norm={model.norm:.6e}, max_pdf={model.max_pdf:.6e}")

    events = model.generate_many(args.events, Sampler(args.seed))

    print("\n" + "=" * 60)
    print("Generation Complete")
    print("=" * 60)
    print(f"Successful events : {len(events)}/{args.events}")
    if events:
        mean_attempts = sum(event.attempts for event in events) / len(events)
        print(f"Attempts / event  : {mean_attempts:.2f}")
    print("=" * 60 + "\n")

    if args.output:
        export_events_to_csv(events, args.output)


if __name__ == "__main__":
    main()
