"""
Tests for the libwallet CI workflow loader and checks.

Tests cover:
- Trigger patterns of the shipped workflow
- Android / iOS jobs and their artifact uploads
- continue-on-error limited to the S3 sync
"""

import pytest

from collectibles.rig.workflow import (
    WorkflowError,
    ensure_valid,
    load_workflow,
    parse_workflow,
    validate_workflow,
)


@pytest.fixture
def workflow(workflow_path):
    return load_workflow(str(workflow_path))


def _doc(**jobs):
    return {
        "name": "Build libwallet",
        "on": {"push": {"tags": ["libwallet-*"]}},
        "jobs": jobs,
    }


def _job(*steps, runs_on="ubuntu-latest"):
    return {"runs-on": runs_on, "steps": list(steps)}


UPLOAD = {"name": "Upload artifacts", "uses": "actions/upload-artifact@v2"}


class TestShippedWorkflow:
    def test_triggers(self, workflow):
        assert workflow.name == "Build libwallet"
        assert workflow.branch_patterns == ["libwallet-*"]
        assert workflow.tag_patterns == ["libwallet-*"]

    def test_triggers_on_matching_refs_only(self, workflow):
        assert workflow.triggers_on("libwallet-0.21.0")
        assert workflow.triggers_on("libwallet-0.21.0", tag=True)
        assert not workflow.triggers_on("development")
        assert not workflow.triggers_on("v0.21.0", tag=True)

    def test_platform_jobs(self, workflow):
        assert set(workflow.jobs) == {"android", "ios"}
        assert workflow.jobs["android"].runs_on == "ubuntu-latest"
        assert workflow.jobs["ios"].runs_on == "macos-10.15"

    def test_android_targets(self, workflow):
        build = workflow.jobs["android"].steps[1]
        assert build.with_args["platforms"].split(";") == [
            "x86_64-linux-android",
            "aarch64-linux-android",
            "armv7-linux-androideabi",
        ]

    def test_each_job_uploads(self, workflow):
        names = [workflow.jobs[j].uploads()[0].with_args["name"] for j in ("android", "ios")]
        assert names == ["libwallet-android", "libwallet-ios"]

    def test_only_s3_sync_tolerates_failure(self, workflow):
        tolerant = [s.label for j in workflow.jobs.values() for s in j.tolerant_steps()]
        assert tolerant == ["Sync to S3"]

    def test_shipped_workflow_is_valid(self, workflow):
        assert validate_workflow(workflow) == []
        assert ensure_valid(workflow) is workflow


class TestValidation:
    def test_boolean_on_key(self):
        wf = parse_workflow({True: {"push": {"branches": "libwallet-*"}}, "jobs": {}})
        assert wf.branch_patterns == ["libwallet-*"]

    def test_no_trigger(self):
        wf = parse_workflow({"name": "x", "on": "push", "jobs": {}})
        assert "Workflow has no push branch or tag trigger" in validate_workflow(wf, ())

    def test_missing_job(self):
        wf = parse_workflow(_doc(android=_job(UPLOAD)))
        assert validate_workflow(wf) == ["Missing job 'ios'"]

    def test_job_without_upload(self):
        wf = parse_workflow(_doc(android=_job(UPLOAD), ios=_job({"run": "make"})))
        assert validate_workflow(wf) == ["Job 'ios' does not upload an artifact"]

    def test_build_step_may_not_tolerate_failure(self):
        build = {"name": "Build", "run": "make", "continue-on-error": True}
        wf = parse_workflow(_doc(android=_job(build, UPLOAD), ios=_job(UPLOAD)))
        problems = validate_workflow(wf)
        assert problems == ["Step 'Build' in job 'android' must not set continue-on-error"]

    def test_unnamed_run_step_label(self):
        wf = parse_workflow(_doc(ios=_job({"run": "mkdir -p out\nls out"})))
        assert wf.jobs["ios"].steps[0].label == "mkdir -p out"

    def test_ensure_valid_raises(self):
        wf = parse_workflow(_doc())
        with pytest.raises(WorkflowError) as exc_info:
            ensure_valid(wf)
        assert len(exc_info.value.problems) == 2

    def test_step_must_be_mapping(self):
        with pytest.raises(WorkflowError):
            parse_workflow(_doc(ios={"runs-on": "x", "steps": ["make"]}))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_workflow(str(tmp_path / "none.yml"))


class TestRefFilters:
    """Branch/tag filters follow GitHub's glob rules, not shell globbing."""

    def _wf(self, *branches):
        return parse_workflow({"on": {"push": {"branches": list(branches)}}, "jobs": {}})

    def test_star_does_not_cross_slash(self):
        wf = self._wf("libwallet-*")
        assert wf.triggers_on("libwallet-feature")
        assert not wf.triggers_on("libwallet-feature/x")

    def test_double_star_crosses_slash(self):
        assert self._wf("libwallet-**").triggers_on("libwallet-feature/x")

    def test_negated_pattern_excludes(self):
        wf = self._wf("libwallet-*", "!libwallet-wip")
        assert wf.triggers_on("libwallet-1.0")
        assert not wf.triggers_on("libwallet-wip")

    def test_later_positive_pattern_reincludes(self):
        wf = self._wf("libwallet-*", "!libwallet-wip*", "libwallet-wip-ready")
        assert not wf.triggers_on("libwallet-wip-draft")
        assert wf.triggers_on("libwallet-wip-ready")

    def test_only_negations_match_nothing(self):
        assert not self._wf("!development").triggers_on("main")

    def test_literal_dot_and_character_class(self):
        wf = self._wf("v[0-9].x")
        assert wf.triggers_on("v1.x")
        assert not wf.triggers_on("v1yx")
        assert not wf.triggers_on("va.x")

    def test_plus_repeats_preceding_character(self):
        wf = self._wf("release-9+")
        assert wf.triggers_on("release-999")
        assert not wf.triggers_on("release-")


class TestMalformedDocuments:
    def test_jobs_must_be_mapping(self):
        with pytest.raises(WorkflowError, match="jobs"):
            parse_workflow({"on": {"push": {"tags": ["x"]}}, "jobs": ["android"]})

    def test_steps_must_be_list(self):
        with pytest.raises(WorkflowError):
            parse_workflow(_doc(ios={"runs-on": "x", "steps": {"run": "make"}}))

    def test_step_with_must_be_mapping(self):
        with pytest.raises(WorkflowError):
            parse_workflow(_doc(ios=_job({"uses": "a/b@v1", "with": ["x"]})))

    def test_numeric_step_name_is_coerced(self):
        step = {"name": 3, "run": "make", "continue-on-error": True}
        wf = parse_workflow(_doc(android=_job(step, UPLOAD), ios=_job(UPLOAD)))
        assert wf.jobs["android"].steps[0].label == "3"
        assert validate_workflow(wf) == [
            "Step '3' in job 'android' must not set continue-on-error"
        ]

    def test_push_must_be_mapping(self):
        with pytest.raises(WorkflowError):
            parse_workflow({"on": {"push": ["libwallet-*"]}, "jobs": {}})
