"""Write the site's JSON exports.

Produces the two files the search side reads after a deploy:

    <output>/api/taglist.json   tag list for the search page sidebar
    <output>/algolia.json       every published note, pushed to the index

Usage:
    python -m codenotes.build --content src/notes --output _site
"""

import argparse
import asyncio
import json
import os
from pathlib import Path
from typing import Any

from codenotes.config import get_settings
from codenotes.dependencies import ContentClient, logger
from codenotes.notes.tools import load_notes, notes_collection, to_index_record
from codenotes.tags.models import TagListExport
from codenotes.tags.tools import build_tag_list

TAG_LIST_EXPORT = Path("api") / "taglist.json"
NOTES_EXPORT = Path("algolia.json")


def atomic_write_json(path: Path, data: Any) -> None:
    """Write JSON next to ``path`` and move it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp.{os.getpid()}")
    tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    tmp_path.replace(path)


async def build_exports(content_dir: Path, output_dir: Path) -> dict[str, int]:
    """Load notes and write both exports.

    Returns:
        Counts of exported notes and tags
    """
    notes = notes_collection(await load_notes(ContentClient(content_path=content_dir)))
    tag_list = build_tag_list(notes)

    atomic_write_json(
        output_dir / TAG_LIST_EXPORT,
        TagListExport(tagList=tag_list).model_dump(),
    )
    atomic_write_json(
        output_dir / NOTES_EXPORT,
        [to_index_record(n).model_dump() for n in notes],
    )

    stats = {"notes": len(notes), "tags": len(tag_list)}
    logger.info("exports_written", extra={"output_dir": str(output_dir), **stats})
    return stats


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line options.

    Defaults for both directories come from settings, so ``CONTENT_DIR`` and
    ``OUTPUT_DIR`` in the environment apply when the flags are omitted.

    Args:
        argv: Arguments without the program name (None reads ``sys.argv``)

    Returns:
        Namespace with ``content`` and ``output`` paths
    """
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Write the tag-list and notes JSON exports.")
    parser.add_argument(
        "--content",
        type=Path,
        default=settings.content_dir,
        help="Directory of markdown notes.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=settings.output_dir,
        help="Site output directory the exports are written into.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Write both exports, exiting with an error if the content directory is missing."""
    args = parse_args(argv)
    if not args.content.is_dir():
        raise SystemExit(f"Content directory not found: {args.content}")
    asyncio.run(build_exports(args.content, args.output))


if __name__ == "__main__":
    main()
