import asyncio
import logging
import signal
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import InspectorConfig, load_config
from .constants import ExtractionDefaults
from .errors import InspectorError
from .formatters import format_results
from .inspector import Inspector
from .models import AbletonProject, SampleOptions
from .serializers import to_json


logger = logging.getLogger(__name__)

USAGE = """\
Usage: ableton-inspector <path-to-als-or-xml> [OPTIONS]
       ableton-inspector --mode=websocket [<path-to-als-or-xml>] [OPTIONS]

What to extract (default: tempo, scale and samples, or the config's defaults):
  --tempo              - Tempo and tempo automation
  --scale              - Key and scale
  --samples            - Audio samples
  --locators           - Arrangement locators
  --time-signature     - Time signature changes
  --tracks             - Track inventory
  --devices            - Devices and plugins
  --all                - Everything above

Sample Options:
  --splice-only        - Only list Splice samples
  --show-all-samples   - List every sample in text output
  --splice-path=PATH   - Custom Splice folder location
  --splice-paths=A,B   - Multiple Splice paths (comma-separated)

Output Options:
  --json               - Output as JSON
  --output=PATH        - Write output to a file
  --config=PATH        - Load configuration from a file
  --watch              - Re-inspect whenever the file is saved

WebSocket Options:
  --mode=websocket     - Serve inspections of uploaded files over WebSocket
  --ws-host=HOST       - WebSocket host (default: localhost)
  --ws-port=PORT       - WebSocket port (default: 8765)

Logging Options:
  --log-file=PATH      - Log to file (default: stderr only)
  --log-level=LEVEL    - Logging level: DEBUG, INFO, WARNING, ERROR (default: WARNING)
"""

SECTION_FLAGS = {
    "--tempo": "tempo",
    "--scale": "scale",
    "--samples": "samples",
    "--locators": "locators",
    "--time-signature": "time_signature",
    "--tracks": "track_types",
    "--devices": "devices",
}


@dataclass
class CLIOptions:
    path: Optional[Path] = None
    mode: str = "inspect"
    sections: List[str] = field(default_factory=list)
    extract_all: bool = False
    splice_only: bool = False
    show_all_samples: bool = False
    splice_paths: List[str] = field(default_factory=list)
    config: Optional[Path] = None
    json: bool = False
    output: Optional[Path] = None
    watch: bool = False
    ws_host: str = "localhost"
    ws_port: int = 8765
    log_file: Optional[Path] = None
    log_level: str = "WARNING"


def setup_logging(log_file: Path = None, level: str = "WARNING"):
    """
    Configure logging to stderr and optionally a file.

    Console output goes to stderr so JSON on stdout stays clean.

    Args:
        log_file: Path to log file (optional)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    simple_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")

    return root_logger


def parse_args(argv: List[str]) -> CLIOptions:
    """
    Parse command line arguments.

    Raises:
        ValueError: On an unknown option or a malformed value
    """
    options = CLIOptions()

    for arg in argv:
        if arg in SECTION_FLAGS:
            options.sections.append(SECTION_FLAGS[arg])
        elif arg == "--all":
            options.extract_all = True
        elif arg == "--splice-only":
            options.splice_only = True
        elif arg == "--show-all-samples":
            options.show_all_samples = True
        elif arg.startswith("--splice-path="):
            splice_path = arg.split("=", 1)[1].strip()
            if splice_path:
                options.splice_paths.append(splice_path)
        elif arg.startswith("--splice-paths="):
            options.splice_paths.extend(
                p.strip() for p in arg.split("=", 1)[1].split(",") if p.strip()
            )
        elif arg.startswith("--config="):
            options.config = Path(arg.split("=", 1)[1])
        elif arg == "--json":
            options.json = True
        elif arg.startswith("--output="):
            options.output = Path(arg.split("=", 1)[1])
        elif arg == "--watch":
            options.watch = True
        elif arg.startswith("--mode="):
            options.mode = arg.split("=", 1)[1]
            if options.mode not in ("inspect", "websocket"):
                raise ValueError(f"Unknown mode: {options.mode}")
        elif arg.startswith("--ws-host="):
            options.ws_host = arg.split("=", 1)[1]
        elif arg.startswith("--ws-port="):
            options.ws_port = int(arg.split("=", 1)[1])
        elif arg.startswith("--log-file="):
            options.log_file = Path(arg.split("=", 1)[1])
        elif arg.startswith("--log-level="):
            options.log_level = arg.split("=", 1)[1]
        elif arg.startswith("-"):
            raise ValueError(f"Unknown option: {arg}")
        elif options.path is None:
            options.path = Path(arg)
        else:
            raise ValueError(f"Unexpected argument: {arg}")

    if options.path is None and options.mode != "websocket":
        raise ValueError("Missing path to an .als or .xml file")

    return options


def resolve_sections(options: CLIOptions, config: Optional[InspectorConfig]):
    """Sections from flags, else from the config, else the defaults."""
    if options.extract_all:
        return tuple(SECTION_FLAGS.values())
    if options.sections:
        return tuple(options.sections)
    if config:
        return config.sections
    return ExtractionDefaults.DEFAULT_SECTIONS


def build_sample_options(options: CLIOptions, config: Optional[InspectorConfig]) -> SampleOptions:
    splice_paths = list(options.splice_paths)
    if config:
        splice_paths += config.splice_paths
    return SampleOptions(
        splice_paths=splice_paths or None,
        splice_only=options.splice_only,
    )


def inspect_file(path: Path, sample_options: SampleOptions, sections) -> AbletonProject:
    """Load a project file and extract the requested sections."""
    inspector = Inspector.from_file(path)
    return inspector.extract_all(sample_options=sample_options, sections=sections, file=str(path))


def render(project: AbletonProject, as_json: bool, show_all_samples: bool) -> str:
    if as_json:
        return to_json(project, pretty=True)
    return format_results(project, show_all_samples=show_all_samples)


def emit(text: str, output: Optional[Path]) -> None:
    if output:
        output.write_text(text, encoding="utf-8")
        print(f"Saved to {output}")
    else:
        print(text)


def watch_file(path: Path, on_change) -> None:
    """Block, calling on_change after every save, until Ctrl+C."""
    from .watcher import FileWatcher

    watcher = FileWatcher(path, on_change)
    watcher.start()
    print(f"\nWatching {path} for changes. Press Ctrl+C to stop.", file=sys.stderr)
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nStopping watcher...", file=sys.stderr)
    finally:
        watcher.stop()


async def run_websocket_server(path: Optional[Path], host: str, port: int,
                               sample_options: SampleOptions, sections):
    """Run the WebSocket server, optionally watching a project file."""
    from .websocket import InspectorWebSocketServer

    server = InspectorWebSocketServer(host, port, sample_options=sample_options, sections=sections)
    await server.start()
    print(f"WebSocket server listening on ws://{host}:{port}", file=sys.stderr)

    loop = asyncio.get_running_loop()
    watcher = None

    if path is not None:
        from .watcher import FileWatcher

        await server.broadcast_project(inspect_file(path, sample_options, sections))

        def on_change(changed_path: Path):
            # Runs on the watchdog thread
            try:
                project = inspect_file(changed_path, sample_options, sections)
            except (InspectorError, OSError) as e:
                logger.error(f"Reload failed: {e}")
                asyncio.run_coroutine_threadsafe(server.broadcast_error("Reload failed", str(e)), loop)
                return
            asyncio.run_coroutine_threadsafe(server.broadcast_project(project), loop)

        watcher = FileWatcher(path, on_change)
        watcher.start()

    stop_event = asyncio.Event()

    def signal_handler():
        print("\nShutting down...", file=sys.stderr)
        stop_event.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, signal_handler)

    await stop_event.wait()

    if watcher:
        watcher.stop()
    await server.stop()


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] in ("-h", "--help"):
        print(USAGE)
        return 0 if argv else 1

    try:
        options = parse_args(argv)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    setup_logging(log_file=options.log_file, level=options.log_level)

    config = load_config(options.config)
    sections = resolve_sections(options, config)
    sample_options = build_sample_options(options, config)
    as_json = options.json or (config is not None and config.output_format == "json")
    show_all = options.show_all_samples or (config is not None and config.show_all_samples)

    try:
        if options.mode == "websocket":
            asyncio.run(run_websocket_server(options.path, options.ws_host, options.ws_port,
                                             sample_options, sections))
            return 0

        project = inspect_file(options.path, sample_options, sections)
        emit(render(project, as_json, show_all), options.output)
    except (InspectorError, OSError, ValueError) as e:
        logger.debug("Inspection failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if options.watch:
        def on_change(changed_path: Path):
            try:
                changed = inspect_file(changed_path, sample_options, sections)
            except (InspectorError, OSError) as e:
                print(f"Error: {e}", file=sys.stderr)
                return
            emit(render(changed, as_json, show_all), options.output)

        watch_file(options.path, on_change)

    return 0


if __name__ == "__main__":
    sys.exit(main())
