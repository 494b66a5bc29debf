# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from functools import partial
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, cast

from dotenv import load_dotenv
from pydantic import ValidationError

from cvtailor.adapters.api import serialize_overrides, serialize_preview
from cvtailor.adapters.api.schema import ManualOverridePayload
from cvtailor.app import (
    LiveRequest,
    delete_variant,
    export_variant,
    list_variants,
    run,
    run_live_preview,
    save_variant,
    show_variant_preview,
)
from cvtailor.config import configure_logging
from cvtailor.domain.model import ManualOverride, Template
from cvtailor.domain.preview import PreviewMode

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from cvtailor.app import PreviewOutcome
    from cvtailor.domain.model import CvVariant

log = logging.getLogger(__name__)

_TEMPLATES = [template.value for template in Template]


def _add_live_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=[],
        help="Job tag to target (repeatable)",
    )
    parser.add_argument(
        "--template",
        choices=_TEMPLATES,
        default=Template.ATS.value,
        help="Document template (default: %(default)s)",
    )
    parser.add_argument(
        "--no-ats-preview",
        dest="ats_preview",
        action="store_false",
        help="Preview with the selected template instead of the ATS layout",
    )
    parser.add_argument(
        "--overrides",
        type=Path,
        help="JSON file of manual toggles: {kind: {entity_id: true|false}}",
    )
    parser.add_argument(
        "--theme",
        type=Path,
        help="JSON file of theme changes for premium templates",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tailor CVs from your career library")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Store variants in the local SQLite database instead of the CV service",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    preview = subparsers.add_parser("preview", help="Resolve a CV preview")
    _add_live_arguments(preview)
    preview.add_argument("--variant", type=str, help="Show a stored variant instead")
    preview.add_argument(
        "--pdf",
        type=Path,
        help="Render the document and write it to this path",
    )

    variants = subparsers.add_parser("variants", help="Manage stored CV variants")
    variants_sub = variants.add_subparsers(dest="variants_command", required=True)
    variants_sub.add_parser("list", help="List stored variants")

    show = variants_sub.add_parser("show", help="Show a variant resolved against the library")
    show.add_argument("variant_id", type=str)

    save = variants_sub.add_parser("save", help="Save the live inputs as a variant")
    _add_live_arguments(save)
    save.add_argument("--name", type=str, required=True, help="Variant name")
    save.add_argument("--id", dest="variant_id", type=str, help="Update this variant instead")

    delete = variants_sub.add_parser("delete", help="Delete a variant")
    delete.add_argument("variant_id", type=str)

    export = variants_sub.add_parser("export", help="Export a variant as PDF")
    export.add_argument("variant_id", type=str)
    export.add_argument("--out", type=Path, required=True, help="Output path")
    export.add_argument(
        "--theme",
        type=Path,
        help="JSON file of theme changes for premium templates",
    )

    return parser.parse_args(list(argv))


def _read_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Unable to read {path}: {exc}") from exc


def _load_overrides(path: Path | None) -> ManualOverride | None:
    if path is None:
        return None
    try:
        payload = ManualOverridePayload.model_validate(_read_json(path))
    except ValidationError as exc:
        raise ValueError(f"Invalid overrides file {path}: {exc}") from exc
    return ManualOverride.from_dict(payload.model_dump())


def _load_theme(path: Path | None) -> dict[str, object] | None:
    if path is None:
        return None
    payload = _read_json(path)
    if not isinstance(payload, dict):
        raise ValueError(f"Theme file {path} must contain a JSON object")
    return cast("dict[str, object]", payload)


def _live_request(args: argparse.Namespace, *, mode: PreviewMode) -> LiveRequest:
    tags = tuple(tag.strip() for tag in args.tags if tag.strip())
    if not tags:
        raise ValueError("At least one --tag is required")
    return LiveRequest(
        job_tags=tags,
        template=args.template,
        ats_preview=args.ats_preview,
        mode=mode,
        theme_changes=_load_theme(args.theme),
        toggles=_load_overrides(args.overrides),
    )


def _print_outcome(outcome: PreviewOutcome) -> None:
    print(outcome.label)
    body: dict[str, object] = {
        "preview": serialize_preview(outcome.preview) if outcome.preview else None,
        "manualOverrides": serialize_overrides(outcome.overrides) if outcome.overrides else None,
    }
    if outcome.unmatched:
        body["unmatched"] = outcome.unmatched
    print(json.dumps(body, indent=2))


def _print_variant(variant: CvVariant) -> None:
    created = variant.created_at.isoformat() if variant.created_at else "-"
    tags = ",".join(variant.job_tags)
    print(f"{variant.id}\t{variant.name}\t{variant.template}\t{tags}\t{created}")


def _report_errors(outcome: PreviewOutcome) -> None:
    for channel, error in outcome.errors.items():
        log.error("%s preview failed: %s", channel, error)
    if not outcome.ok:
        raise RuntimeError("Preview did not complete")


def _write_document(path: Path, content: bytes) -> None:
    path.write_bytes(content)
    log.info("Wrote %d bytes to %s", len(content), path)


def _run_preview(args: argparse.Namespace) -> None:
    if args.variant:
        outcome = run(
            partial(show_variant_preview, variant_id=args.variant),
            local_variants=args.local,
        )
        _print_outcome(outcome)
        _report_errors(outcome)
        return

    mode = PreviewMode.PDF if args.pdf else PreviewMode.JSON
    request = _live_request(args, mode=mode)
    outcome = run(partial(run_live_preview, request=request), local_variants=args.local)
    _print_outcome(outcome)
    _report_errors(outcome)
    if args.pdf:
        if outcome.rendered is None:
            raise RuntimeError("No document was rendered")
        _write_document(args.pdf, outcome.rendered.content)


def _run_variants(args: argparse.Namespace) -> None:
    command = args.variants_command
    if command == "list":
        for variant in run(list_variants, local_variants=args.local):
            _print_variant(variant)
    elif command == "show":
        outcome = run(
            partial(show_variant_preview, variant_id=args.variant_id),
            local_variants=args.local,
        )
        _print_outcome(outcome)
        _report_errors(outcome)
    elif command == "save":
        request = _live_request(args, mode=PreviewMode.JSON)
        variant = run(
            partial(save_variant, request=request, name=args.name, variant_id=args.variant_id),
            local_variants=args.local,
        )
        _print_variant(variant)
    elif command == "delete":
        run(partial(delete_variant, variant_id=args.variant_id), local_variants=args.local)
    elif command == "export":
        theme_changes = _load_theme(args.theme)
        document = run(
            partial(export_variant, variant_id=args.variant_id, theme_changes=theme_changes),
            local_variants=args.local,
        )
        _write_document(args.out, document.content)
    else:
        raise ValueError(f"Unsupported variants command: {command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "preview":
            _run_preview(parsed_args)
        elif parsed_args.command == "variants":
            _run_variants(parsed_args)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run_cli() -> None:
    """Console-script entry point: load ``.env``, trap Ctrl+C, run :func:`main`."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run_cli()
