"""Build tasks the IDE runs around sync/build events, and action delegation."""

from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .project_models import ProjectModel

PHASES = ("beforeSync", "afterSync", "beforeBuild", "afterBuild", "beforeRebuild", "afterRebuild")


@dataclass(frozen=True)
class TaskRef:
    """A task path (``:sub:task``) and the root project directory that owns it."""
    task_path: str
    project_path: str

    def to_map(self) -> dict:
        return {"taskPath": self.task_path, "projectPath": self.project_path}


class TaskTriggersConfig:
    """Tasks attached to IDE phases.

    Tasks may be given as ``TaskRef`` objects or as task paths; plain paths
    are bound to the root project. A missing leading ``:`` is added. Only
    phases with at least one task are serialized.
    """

    def __init__(self, project: ProjectModel):
        self.project_path = project.project_dir.as_posix()
        self.phases = OrderedDict((phase, []) for phase in PHASES)

    def _task(self, task: Union[str, TaskRef]) -> TaskRef:
        if isinstance(task, TaskRef):
            return task
        path = task if task.startswith(":") else f":{task}"
        return TaskRef(path, self.project_path)

    def _add(self, phase: str, tasks):
        self.phases[phase].extend(self._task(t) for t in tasks)

    def before_sync(self, *tasks):
        self._add("beforeSync", tasks)

    def after_sync(self, *tasks):
        self._add("afterSync", tasks)

    def before_build(self, *tasks):
        self._add("beforeBuild", tasks)

    def after_build(self, *tasks):
        self._add("afterBuild", tasks)

    def before_rebuild(self, *tasks):
        self._add("beforeRebuild", tasks)

    def after_rebuild(self, *tasks):
        self._add("afterRebuild", tasks)

    def to_map(self) -> dict:
        return {
            phase: [t.to_map() for t in tasks]
            for phase, tasks in self.phases.items()
            if tasks
        }


class TestRunner(Enum):
    __test__ = False

    PLATFORM = "PLATFORM"
    GRADLE = "GRADLE"
    CHOOSE_PER_TEST = "CHOOSE_PER_TEST"


class ActionDelegationConfig:
    """Whether build/run and tests are delegated to the build tool."""

    def __init__(self):
        self.delegate_build_run_to_gradle: Optional[bool] = None
        self.test_runner: Optional[TestRunner] = None

    def to_map(self) -> dict:
        result = {}
        if self.delegate_build_run_to_gradle is not None:
            result["delegateBuildRunToGradle"] = self.delegate_build_run_to_gradle
        if self.test_runner is not None:
            result["testRunner"] = self.test_runner.value
        return result
