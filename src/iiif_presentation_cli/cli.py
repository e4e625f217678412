import argparse
import json
import sys
from pathlib import Path

from iiif_presentation_core import __version__
from iiif_presentation_core.batch import FRAGMENT_KINDS, build_fragments
from iiif_presentation_core.config_manager import ConfigManager, get_config_manager
from iiif_presentation_core.context import BuildContext
from iiif_presentation_core.descriptors import ResourceDescriptor
from iiif_presentation_core.logger import get_logger, setup_logging

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build IIIF annotation bodies and renderings from media metadata")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="JSON file with a list of resource descriptors ('-' for stdin)",
    )
    parser.add_argument("-o", "--output", help="Write the JSON result to this file instead of stdout")
    parser.add_argument(
        "-k",
        "--kind",
        choices=FRAGMENT_KINDS,
        default="both",
        help="Nodes to build for each resource",
    )
    parser.add_argument("--api-version", help="Image API version of the services (2.1 or 3.0)")
    parser.add_argument("--base-url", help="Base url of the image and media servers")
    parser.add_argument("--site-slug", help="Site used for rendering ids when a media has no original url")
    parser.add_argument("-w", "--workers", type=int, help="Concurrent builds")
    parser.add_argument(
        "--probe-dimensions",
        action="store_true",
        help="Measure images without width/height (local file or remote info.json)",
    )
    parser.add_argument("--config", help="Path of the config.json to use")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    return parser


def _read_descriptors(source: str) -> list[ResourceDescriptor]:
    raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    payload = json.loads(raw or "[]")
    if isinstance(payload, dict):
        payload = payload.get("resources", [payload])
    if not isinstance(payload, list):
        raise ValueError("Expected a JSON list of resource descriptors")
    return [ResourceDescriptor.from_dict(item) for item in payload if isinstance(item, dict)]


def _write_output(document: dict, output: str | None) -> None:
    text = json.dumps(document, indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        print(f"✅ Fragments written to {output}", file=sys.stderr)
    else:
        sys.stdout.write(text + "\n")


def main(argv=None):
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    cm = ConfigManager.load(Path(args.config)) if args.config else get_config_manager()
    setup_logging(cm)

    try:
        descriptors = _read_descriptors(args.input)
        context = BuildContext.from_config(
            cm,
            api_version=args.api_version,
            base_url=args.base_url,
            site_slug=args.site_slug,
        )
        result = build_fragments(
            descriptors,
            context,
            kind=args.kind,
            workers=args.workers or int(cm.get_setting("batch.workers", 4)),
            probe_dimensions=args.probe_dimensions,
            probe_timeout=int(cm.get_setting("batch.probe_timeout", 12)),
            show_progress=args.progress,
        )
    except (OSError, ValueError) as e:
        logger.exception("Fatal error during CLI execution")
        print(f"\n❌ Error: {e}", file=sys.stderr)
        sys.exit(2)

    _write_output(result.to_dict(), args.output)

    if not result.ok:
        print(f"⚠️  {len(result.failures)} node(s) could not be built", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
