"""Runtime diagnostics for decoder tooling and terminal rendering support."""

from __future__ import annotations

import importlib
import shutil
import subprocess
from dataclasses import dataclass
from typing import Literal

DoctorStatus = Literal["ok", "missing", "error"]


@dataclass(frozen=True)
class DoctorCheck:
    """One environment/tooling readiness check result."""

    name: str
    status: DoctorStatus
    required: bool
    detail: str
    hint: str | None = None


@dataclass(frozen=True)
class DoctorReport:
    """Collection of doctor checks and derived process exit contract."""

    checks: list[DoctorCheck]

    @property
    def exit_code(self) -> int:
        """Return non-zero when any required check failed or is missing."""
        for check in self.checks:
            if check.required and check.status != "ok":
                return 2
        return 0


def run_doctor(*, require_ffmpeg: bool = False) -> DoctorReport:
    """Run diagnostics; ffmpeg is only required when non-WAV input is expected."""
    return DoctorReport(
        checks=[
            probe_rich(),
            probe_ffmpeg(required=require_ffmpeg),
        ]
    )


def render_report(report: DoctorReport) -> str:
    """Render terminal-friendly diagnostics report text."""
    lines = ["audiowave doctor", ""]
    for check in report.checks:
        req = "required" if check.required else "optional"
        lines.append(
            f"{_status_token(check.status)} {check.name:<7} [{req}] {check.detail}"
        )
        if check.hint:
            lines.append(f"      hint: {check.hint}")
    lines.append("")
    lines.append("Result: OK" if report.exit_code == 0 else "Result: FAIL")
    return "\n".join(lines)


def probe_rich() -> DoctorCheck:
    """Verify the terminal rendering dependency is importable."""
    try:
        module = importlib.import_module("rich")
    except Exception as exc:
        return DoctorCheck(
            name="rich",
            status="missing",
            required=True,
            detail=f"not importable ({exc.__class__.__name__})",
            hint="Install Python dependencies (pip install audiowave).",
        )
    version = getattr(module, "__version__", None)
    detail = f"importable ({version})" if version else "importable"
    return DoctorCheck(name="rich", status="ok", required=True, detail=detail)


def probe_ffmpeg(*, required: bool) -> DoctorCheck:
    """Verify ffmpeg binary presence and basic executable health."""
    ffmpeg = shutil.which("ffmpeg")
    if ffmpeg is None:
        return DoctorCheck(
            name="ffmpeg",
            status="missing",
            required=required,
            detail="binary not found on PATH",
            hint="Install ffmpeg to decode formats other than WAV.",
        )
    try:
        proc = subprocess.run(
            [ffmpeg, "-version"],
            capture_output=True,
            text=True,
            timeout=2,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        return DoctorCheck(
            name="ffmpeg",
            status="error",
            required=required,
            detail=f"launch failed ({exc.__class__.__name__})",
            hint="Reinstall ffmpeg and verify PATH.",
        )
    if proc.returncode != 0:
        stderr_first = proc.stderr.strip().splitlines()[0] if proc.stderr else ""
        detail = f"ffmpeg -version failed (exit={proc.returncode})" + (
            f": {stderr_first}" if stderr_first else ""
        )
        return DoctorCheck(
            name="ffmpeg",
            status="error",
            required=required,
            detail=detail,
            hint="Reinstall ffmpeg and verify PATH.",
        )
    first_line = proc.stdout.strip().splitlines()[0] if proc.stdout else ""
    detail = first_line or f"binary found at {ffmpeg}"
    return DoctorCheck(name="ffmpeg", status="ok", required=required, detail=detail)


def _status_token(status: DoctorStatus) -> str:
    if status == "ok":
        return "[OK]"
    if status == "missing":
        return "[MISS]"
    return "[ERR]"
