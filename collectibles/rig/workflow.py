"""
workflow.py - libwallet CI workflow
Single responsibility: load the GitHub Actions workflow that builds the mobile
wallet libraries and check its trigger and failure policy.
"""
import logging
import os

import yaml

from collectibles.config import (
    LIBWALLET_WORKFLOW_PATH,
    WORKFLOW_REQUIRED_JOBS,
    WORKFLOW_TOLERANT_STEP_KEYWORD,
)
from collectibles.domain.models import Workflow, WorkflowJob, WorkflowStep

logger = logging.getLogger(__name__)


class WorkflowError(ValueError):
    def __init__(self, message: str, problems: list[str] | None = None):
        super().__init__(message)
        self.problems = problems or []


def _as_list(value) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v) for v in value]
    return [str(value)]


def _optional_str(value) -> str | None:
    return None if value is None else str(value)


def _mapping(raw, what: str) -> dict:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise WorkflowError(f"{what} must be a mapping, got {type(raw).__name__}")
    return raw


def _parse_step(raw) -> WorkflowStep:
    if not isinstance(raw, dict):
        raise WorkflowError(f"Step must be a mapping, got {raw!r}")
    return WorkflowStep(
        name=_optional_str(raw.get("name")),
        uses=_optional_str(raw.get("uses")),
        run=_optional_str(raw.get("run")),
        continue_on_error=bool(raw.get("continue-on-error", False)),
        with_args=dict(_mapping(raw.get("with"), "Step `with`")),
        env=dict(_mapping(raw.get("env"), "Step `env`")),
    )


def parse_workflow(data) -> Workflow:
    if not isinstance(data, dict):
        raise WorkflowError("Workflow document must be a mapping")
    # YAML 1.1 reads a bare `on:` key as boolean True
    triggers = data.get("on", data.get(True)) or {}
    if isinstance(triggers, (str, list)):
        triggers = {t: None for t in _as_list(triggers)}
    push = _mapping(_mapping(triggers, "`on`").get("push"), "`on.push`")

    jobs = {}
    for job_name, raw_job in _mapping(data.get("jobs"), "`jobs`").items():
        if not isinstance(raw_job, dict):
            raise WorkflowError(f"Job {job_name!r} must be a mapping")
        raw_steps = raw_job.get("steps") or []
        if not isinstance(raw_steps, list):
            raise WorkflowError(f"Steps of job {job_name!r} must be a list")
        jobs[str(job_name)] = WorkflowJob(
            name=str(job_name),
            runs_on=str(raw_job.get("runs-on", "")),
            steps=[_parse_step(s) for s in raw_steps],
        )

    return Workflow(
        name=str(data.get("name", "")),
        branch_patterns=_as_list(push.get("branches")),
        tag_patterns=_as_list(push.get("tags")),
        jobs=jobs,
    )


def load_workflow(path: str = LIBWALLET_WORKFLOW_PATH) -> Workflow:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Workflow file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise WorkflowError(f"Malformed workflow file {path}: {exc}") from exc
    wf = parse_workflow(data)
    logger.info("Loaded workflow %r with jobs %s", wf.name, ", ".join(wf.jobs))
    return wf


def validate_workflow(wf: Workflow, required_jobs=WORKFLOW_REQUIRED_JOBS) -> list[str]:
    problems = []
    if not wf.branch_patterns and not wf.tag_patterns:
        problems.append("Workflow has no push branch or tag trigger")

    for job_name in required_jobs:
        job = wf.jobs.get(job_name)
        if job is None:
            problems.append(f"Missing job {job_name!r}")
            continue
        if not job.uploads():
            problems.append(f"Job {job_name!r} does not upload an artifact")

    for job in wf.jobs.values():
        for step in job.tolerant_steps():
            if WORKFLOW_TOLERANT_STEP_KEYWORD not in step.label.lower():
                problems.append(
                    f"Step {step.label!r} in job {job.name!r} must not set continue-on-error"
                )
    return problems


def ensure_valid(wf: Workflow) -> Workflow:
    problems = validate_workflow(wf)
    if problems:
        raise WorkflowError(f"{len(problems)} problem(s) in workflow", problems)
    return wf
