#!/usr/bin/env python3
"""Game telemetry entry point: run the analyzer over a folder of captured frames."""

import sys
import argparse
import logging
from typing import Optional

from game_telemetry.capture import FrameSequence
from game_telemetry.config import TelemetrySettings, load_settings
from game_telemetry.core.analyzer import GameTelemetryAnalyzer
from game_telemetry.core.exceptions import TelemetryError
from game_telemetry.models import FrameStatus
from game_telemetry.utils import MatchDebugRecorder

# Simple logging setup
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


class TelemetryApp:
    """Main telemetry application."""

    def __init__(self, settings: TelemetrySettings, debug: bool = False):
        self.settings = settings
        self.debug = debug
        self.analyzer: Optional[GameTelemetryAnalyzer] = None
        self.recorder: Optional[MatchDebugRecorder] = None

        if debug:
            logging.getLogger().setLevel(logging.DEBUG)

    def setup_components(self) -> None:
        logger.info("Initializing telemetry components...")
        if self.debug:
            self.recorder = MatchDebugRecorder(self.settings.debug_dir)
        self.analyzer = GameTelemetryAnalyzer.from_samples(self.settings, observer=self.recorder)

    def run(self, frames: FrameSequence) -> int:
        if not self.analyzer:
            raise RuntimeError("Components not initialized. Call setup_components() first.")

        processed = 0
        for timestamp, frame in frames:
            if self.recorder is not None:
                self.recorder.set_frame(timestamp)

            status = self.analyzer.process_frame(frame, timestamp)
            if status is None:
                continue

            processed += 1
            logger.info(format_status(status))

        logger.info(f"Processed {processed}/{len(frames)} frames")
        return processed


def format_status(status: FrameStatus) -> str:
    angle = f"{status.joystick_angle:.1f}" if status.joystick_detected else "n/a"
    icons = " ".join(f"{name}={value}" for name, value in status.icon_readings.items())
    units = ", ".join(f"#{e.identity}:L{e.level}@{e.position}" for e in status.entities) or "-"
    return f"t={status.timestamp}ms joystick={angle} {icons} units=[{units}]"


def setup_args() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Game telemetry - cooldowns, currency, joystick and unit levels from captured frames",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s frames/ --samples samples/           # Analyze every frame in frames/
  %(prog)s frames/ --start 141 --stop 1002      # Analyze a slice of the sequence
  %(prog)s frames/ --debug                      # Verbose logging and match captures
        """,
    )

    parser.add_argument("frames", nargs="?", help="Folder of frames named <prefix>_<seconds>.<ext>")
    parser.add_argument("--samples", default=None, help="Digit templates and mask folder (default: settings)")
    parser.add_argument("--config", default=None, help="JSON settings file")
    parser.add_argument("--start", type=int, default=None, help="Index of the first frame to analyze")
    parser.add_argument("--stop", type=int, default=None, help="Index after the last frame to analyze")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging and match captures")
    parser.add_argument("--debug-dir", default=None, help="Directory for match captures")
    parser.add_argument("--info", action="store_true", help="Show system information only")

    return parser


def show_info(settings: TelemetrySettings) -> None:
    print("\n" + "=" * 60)
    print("Game Telemetry Reader")
    print("=" * 60)
    print(f"\nCanvas: {settings.canvas_size[0]}x{settings.canvas_size[1]}")
    print(f"Samples: {settings.samples_dir} (mask: {settings.mask_file})")
    print("Fixed icons:")
    for icon in settings.icons:
        print(f"  • {icon.name}: {icon.crop_rect()} [{icon.template_set}]")
    js = settings.joystick
    print(f"Joystick: region={js.search_region} axis={js.axis}")
    print("-" * 60)


def main(argv=None) -> int:
    parser = setup_args()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
        overrides = {}
        if args.samples:
            overrides["samples_dir"] = args.samples
        if args.debug_dir:
            overrides["debug_dir"] = args.debug_dir
        if overrides:
            settings = settings.model_copy(update=overrides)

        if args.info:
            show_info(settings)
            return 0

        if not args.frames:
            parser.error("the frames folder is required")

        app = TelemetryApp(settings, debug=args.debug)
        app.setup_components()

        frames = FrameSequence(args.frames, start=args.start, stop=args.stop)
        app.run(frames)
        app.analyzer.print_summary()
        return 0

    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user. Exiting...")
        return 130  # Standard exit code for Ctrl+C
    except TelemetryError as e:
        logger.error(f"Telemetry run failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
