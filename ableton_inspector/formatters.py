"""Plain-text rendering of an inspected project for the command line."""

from typing import List

from .models import AbletonProject

RULE = "=" * 60


def format_results(project: AbletonProject, show_all_samples: bool = False) -> str:
    """
    Render the populated sections of a project summary.

    Args:
        project: Extraction result
        show_all_samples: List every sample instead of only Splice samples

    Returns:
        Multi-line report
    """
    lines: List[str] = ["", project.file, RULE]

    if project.tempo:
        lines += ["", "TEMPO", f"  Initial Tempo: {_number(project.tempo.initial_tempo)} BPM"]
        # The initial-value event alone is not automation
        if len(project.tempo.tempo_changes) > 1:
            lines.append(f"  Tempo Changes: {len(project.tempo.tempo_changes)}")
        else:
            lines.append("  No tempo automation")

    if project.scale:
        lines += ["", "SCALE"]
        unique = project.scale.unique_scales
        if not unique:
            lines.append("  No scale information found")
        elif len(unique) == 1:
            lines.append(f"  Key: {unique[0].label}")
        else:
            lines.append(f"  Multiple Scales ({len(unique)}):")
            for label, count in project.scale.distribution.items():
                lines.append(f"    {label}: {count} occurrences")

    if project.samples:
        samples = project.samples
        lines += [
            "",
            "SAMPLES",
            f"  Total Samples: {samples.total_samples}",
            f"  Splice Samples: {samples.splice_samples}",
        ]
        if show_all_samples and samples.samples:
            lines += ["", "  All Samples:"]
            for sample in samples.samples:
                marker = "●" if sample.is_splice else "○"
                lines.append(f"    {marker} {sample.filename}{_pack(sample.pack_name)}")
        elif samples.splice_samples > 0:
            lines += ["", "  Splice Sample List:"]
            for sample in samples.samples:
                if sample.is_splice:
                    lines.append(f"    • {sample.filename}{_pack(sample.pack_name)}")
        if samples.searched_paths:
            lines += ["", "  Custom Splice Paths:"]
            lines += [f"    - {path}" for path in samples.searched_paths]

    if project.locators:
        lines += ["", "LOCATORS"]
        if not project.locators.locators:
            lines.append("  No locators")
        for locator in project.locators.locators:
            line = f"  {_number(locator.time):>8}  {locator.name}"
            if locator.duration_text:
                line += f" ({locator.duration_text})"
            if locator.is_song_start:
                line += " [song start]"
            lines.append(line)

    if project.time_signature:
        signature = project.time_signature
        lines += ["", "TIME SIGNATURE", f"  Initial: {signature.initial_time_signature}"]
        if signature.has_changes:
            lines.append(f"  Changes: {len(signature.changes)}")
            for change in signature.changes:
                lines.append(f"    {_number(change.time)}: {change.numerator}/{change.denominator}")

    if project.track_types:
        summary = project.track_types.summary
        lines += [
            "",
            "TRACKS",
            f"  Audio: {summary['audio']}  MIDI: {summary['midi']}  "
            f"Return: {summary['return']}  Master: {summary['master']}  Total: {summary['total']}",
        ]
        for track in project.track_types.tracks:
            lines.append(f"    [{track.type}] {track.name or track.user_defined_name}")

    if project.devices:
        summary = project.devices.summary
        lines += [
            "",
            "DEVICES",
            f"  Native: {summary['native']}  VST: {summary['vst']}  AU: {summary['au']}  "
            f"Max: {summary['max']}  Total: {summary['total']}",
        ]
        for device in project.devices.devices:
            maker = f" by {device.manufacturer}" if device.manufacturer else ""
            lines.append(f"    {device.name} ({device.category}){maker}")

    lines.append("")
    return "\n".join(lines) + "\n"


def _number(value: float) -> str:
    return str(int(value)) if value == int(value) else str(value)


def _pack(pack_name) -> str:
    return f" ({pack_name})" if pack_name else ""
