from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from bootcode.api import find_loop_accumulator, repair_source
from bootcode.errors import BootcodeError
from bootcode.schemas import ManifestJob, Query, QueryReport


def _resolve_path(raw: str, *, manifest_path: Path) -> str:
    p = Path(raw)
    if p.is_absolute():
        return str(p)
    return str((manifest_path.parent / p).resolve())


def _parse_job(raw: Any, *, manifest_path: Path) -> ManifestJob:
    if not isinstance(raw, dict):
        raise ValueError("each job must be a mapping")
    data = dict(raw)
    if "id" not in data:
        raise ValueError("job.id is required")
    if "path" not in data:
        raise ValueError(f"job {data['id']!r}: path is required")
    data["id"] = str(data["id"])
    data["path"] = _resolve_path(str(data["path"]), manifest_path=manifest_path)
    queries = data.get("queries")
    if isinstance(queries, str):
        data["queries"] = [queries]
    return ManifestJob.model_validate(data)


def load_manifest(path: Path) -> list[ManifestJob]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("manifest must be a YAML mapping")

    raw_jobs = data.get("jobs")
    if not isinstance(raw_jobs, list) or not raw_jobs:
        raise ValueError("manifest.jobs must be a non-empty list")

    jobs: list[ManifestJob] = []
    seen: set[str] = set()
    for raw in raw_jobs:
        job = _parse_job(raw, manifest_path=path)
        if job.id in seen:
            raise ValueError(f"duplicate job id: {job.id}")
        seen.add(job.id)
        jobs.append(job)
    return jobs


def run_query(query: Query, src: str, *, concurrency: int = 1) -> QueryReport:
    try:
        if query is Query.LOOP:
            return QueryReport(query=query, ok=True, output=find_loop_accumulator(src))
        result = repair_source(src, concurrency=concurrency)
        return QueryReport(
            query=query, ok=True, output=result.accumulator, mutated_index=result.index
        )
    except BootcodeError as e:
        return QueryReport(query=query, ok=False, error=str(e))


def run_job(job: ManifestJob, *, concurrency: int = 1) -> list[QueryReport]:
    src = Path(job.path).read_text(encoding="utf-8")
    return [run_query(q, src, concurrency=concurrency) for q in job.queries]


def expectation_failures(job: ManifestJob, reports: list[QueryReport]) -> list[str]:
    failures: list[str] = []
    for report in reports:
        if not report.ok:
            failures.append(f"{report.query.value}: {report.error}")
            continue
        expected = job.expect.get(report.query)
        if expected is not None and expected != report.output:
            failures.append(f"{report.query.value}: expected {expected}, got {report.output}")
    return failures
