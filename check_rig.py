"""
check_rig.py - docker rig / libwallet workflow の整合性チェック

    python check_rig.py [compose.yml] [workflow.yml]
"""
import logging
import sys

from collectibles.config import LIBWALLET_WORKFLOW_PATH, RIG_COMPOSE_PATH
from collectibles.exit_codes import ExitCode, ExitError
from collectibles.rig import compose, workflow

logger = logging.getLogger("check_rig")


def check(compose_path: str, workflow_path: str) -> None:
    """Raise ExitError describing the first file that fails."""
    try:
        comp = compose.ensure_valid(compose.load_composition(compose_path))
        wf = workflow.ensure_valid(workflow.load_workflow(workflow_path))
    except OSError as exc:
        raise ExitError(ExitCode.IO_ERROR, str(exc)) from exc
    except (compose.DescriptorError, workflow.WorkflowError) as exc:
        for problem in exc.problems:
            logger.error(problem)
        raise ExitError.config(exc) from exc

    order = compose.dependency_order(comp)
    print(f"Compose OK: start order {' -> '.join(order)}")
    print(f"Workflow OK: {wf.name} ({', '.join(wf.jobs)})")


def run(argv: list[str]) -> int:
    compose_path = argv[0] if len(argv) > 0 else RIG_COMPOSE_PATH
    workflow_path = argv[1] if len(argv) > 1 else LIBWALLET_WORKFLOW_PATH
    try:
        check(compose_path, workflow_path)
    except ExitError as err:
        print(f"\n{err.exit_code.description} {err.details or ''}")
        if err.exit_code.hint:
            print(err.exit_code.hint)
        return int(err.exit_code)
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(run(sys.argv[1:]))
