import asyncio
import json
import logging
import os

import click
from pydantic import ValidationError

from event_canvas.config.profiles import DEFAULT_PROFILE_FOR_KIND, PROFILES, get_profile
from event_canvas.design.defaults import default_design
from event_canvas.design.elements import parse_design
from event_canvas.design.geometry import DeviceProfile
from event_canvas.design.subjects import SAMPLE_SUBJECT, EventContext, subject_variables
from event_canvas.errors import ConfigurationError
from event_canvas.renderer.compositor import BatchCompositor, batch_filename, preview_filename
from event_canvas.renderer.document_renderer import DocumentRenderer
from event_canvas.renderer.preview_renderer import PreviewRenderer
from event_canvas.validator.pdf_validator import validate_export


def _load_json(path: str):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


@click.command(help="Export certificates/credentials for event subjects, render a PNG preview, or validate an exported batch.")
@click.option("--kind", type=click.Choice(["certificate", "credential"], case_sensitive=False), default="credential", show_default=True, help="Document kind (used when --design is omitted)")
@click.option("--design", "design_path", type=click.Path(exists=True, dir_okay=False), default=None, help="Design JSON file; defaults to the built-in design for --kind")
@click.option("--subjects", "subjects_path", type=click.Path(exists=True, dir_okay=False), default=None, help="JSON list of subjects (name, email, role, affiliation, country, id)")
@click.option("--event", "event_name", type=str, default="Evento", show_default=True, help="Event name for {{evento}}")
@click.option("--start-date", "start_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Event start date (YYYY-MM-DD)")
@click.option("--end-date", "end_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Event end date (YYYY-MM-DD)")
@click.option("--profile", "profile_key", type=click.Choice(sorted(PROFILES.keys())), default=None, help="Batch layout profile (defaults per kind)")
@click.option("--out", "out_path", type=str, default=None, help="Output PDF path (default: outputs/<generated name>.pdf)")
@click.option("--preview-out", "preview_out", type=str, default=None, help="If provided, writes a PNG preview of the design and exits")
@click.option("--device", type=click.Choice([d.value for d in DeviceProfile]), default=DeviceProfile.DESKTOP.value, show_default=True, help="Preview device profile")
@click.option("--validate-path", "validate_path", type=click.Path(exists=True, dir_okay=False), default=None, help="If provided, validates the given batch PDF and exits")
@click.option("--validate-units", "validate_units", type=click.IntRange(min=0), default=None, help="Number of units the batch should contain (page count check)")
@click.option("--verbose", is_flag=True, default=False, help="Log progress")
def main(kind: str, design_path, subjects_path, event_name: str, start_date, end_date, profile_key, out_path, preview_out, device: str, validate_path, validate_units, verbose: bool):
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        design = parse_design(_load_json(design_path)) if design_path else default_design(kind.lower())
    except (ValidationError, json.JSONDecodeError) as e:
        click.echo(f"❌ Invalid design file: {e}")
        raise SystemExit(1)

    context = EventContext(
        event_name=event_name,
        start_date=start_date.date() if start_date else None,
        end_date=end_date.date() if end_date else None,
    )
    profile = get_profile(profile_key or DEFAULT_PROFILE_FOR_KIND[design.kind])

    # Validation mode
    if validate_path:
        try:
            report = validate_export(validate_path, design, profile, unit_count=validate_units)
        except ConfigurationError as e:
            click.echo(f"❌ Validation failed: {e}")
            raise SystemExit(1)
        click.echo(f"Validation for {validate_path}")
        click.echo(f"Pages: {report.page_count}")
        click.echo(f"First page size: {report.page_size_pt[0]:.2f} x {report.page_size_pt[1]:.2f} pt")
        if not report.issues:
            click.echo("✅ No issues found.")
        else:
            for iss in report.issues:
                click.echo(f"{iss.level.upper()}: {iss.message}")
        if not report.ok:
            raise SystemExit(1)
        return

    # Preview mode
    if preview_out:
        variables = subject_variables(SAMPLE_SUBJECT, context, design)
        frame = PreviewRenderer(DeviceProfile(device), interactive=False).render(design, variables)
        os.makedirs(os.path.dirname(preview_out) or ".", exist_ok=True)
        frame.image.save(preview_out, format="PNG")
        click.echo(f"✅ Wrote preview {preview_out} ({frame.size[0]}x{frame.size[1]} px, {device})")
        return

    # Export mode
    try:
        if subjects_path:
            records = _load_json(subjects_path)
            if not isinstance(records, list):
                raise ConfigurationError("Subjects file must contain a JSON list")
            pdf = asyncio.run(BatchCompositor().export(design, records, context, profile))
            default_name = batch_filename(design, context)
        else:
            pdf = asyncio.run(DocumentRenderer().render_single(design, SAMPLE_SUBJECT, context))
            records = [SAMPLE_SUBJECT]
            default_name = preview_filename(design)
    except (ConfigurationError, json.JSONDecodeError) as e:
        click.echo(f"❌ Export failed: {e}")
        raise SystemExit(1)

    out_path = out_path or os.path.join("outputs", default_name)
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "wb") as f:
        f.write(pdf)
    click.echo(f"✅ Exported {len(records)} unit(s) to {out_path}")


if __name__ == "__main__":
    main()
