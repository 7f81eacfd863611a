"""Run configurations and their before-run tasks.

Each configuration serializes to a dict that starts with ``defaults``,
``type`` and ``name`` followed by type-specific keys. Unset options are
written as ``null``; optional extensions such as ``shortenCommandLine`` are
only present when set.
"""

from collections import OrderedDict
from enum import Enum
from typing import Callable, Optional, Union

from .errors import SettingsError


class ShortenCommandLine(Enum):
    NONE = "NONE"
    MANIFEST = "MANIFEST"
    CLASSPATH_FILE = "CLASSPATH_FILE"
    ARGS_FILE = "ARGS_FILE"


class RemoteMode(Enum):
    ATTACH = "ATTACH"
    LISTEN = "LISTEN"


class RemoteTransport(Enum):
    SOCKET = "SOCKET"
    SHARED_MEM = "SHARED_MEM"


# ── Before-run tasks ──────────────────────────────────────────────────────────

class BeforeRunTask:
    type = None

    def __init__(self, name: str):
        self.name = name

    def to_map(self) -> dict:
        return {"type": self.type}


class Make(BeforeRunTask):
    type = "make"

    def __init__(self, name: str = "make"):
        super().__init__(name)
        self.enabled = True

    def to_map(self) -> dict:
        result = super().to_map()
        result["enabled"] = self.enabled
        return result


class BuildArtifact(BeforeRunTask):
    """Builds an IDE artifact (by name) before launching."""
    type = "buildArtifact"

    def __init__(self, name: str):
        super().__init__(name)
        self.artifact_name: Optional[str] = None

    def to_map(self) -> dict:
        result = super().to_map()
        result["artifactName"] = self.artifact_name
        return result


class GradleTask(BeforeRunTask):
    type = "gradleTask"

    def __init__(self, name: str):
        super().__init__(name)
        self.project_path: Optional[str] = None
        self.task_name: Optional[str] = None

    def to_map(self) -> dict:
        result = super().to_map()
        result["projectPath"] = self.project_path
        result["taskName"] = self.task_name
        return result


class BeforeRunContainer:
    """Before-run tasks of one configuration, in declaration order."""

    def __init__(self):
        self._tasks = OrderedDict()

    def create(self, name: str, kind=Make, configure: Optional[Callable] = None) -> BeforeRunTask:
        if name in self._tasks:
            raise SettingsError(f"Before-run task '{name}' already exists")
        task = self._tasks[name] = kind(name)
        if configure is not None:
            configure(task)
        return task

    def to_list(self) -> list:
        return [t.to_map() for t in self._tasks.values()]

    def __iter__(self):
        return iter(self._tasks.values())

    def __len__(self):
        return len(self._tasks)


# ── Configurations ────────────────────────────────────────────────────────────

def _enum_value(value):
    return value.value if isinstance(value, Enum) else value


class RunConfiguration:
    type = None

    def __init__(self, name: str):
        self.name = name
        self.defaults = False

    def to_map(self) -> dict:
        return {"defaults": self.defaults, "type": self.type, "name": self.name}


class Application(RunConfiguration):
    type = "application"

    def __init__(self, name: str):
        super().__init__(name)
        self.envs: Optional[dict] = None
        self.working_directory: Optional[str] = None
        self.before_run = BeforeRunContainer()
        self.jvm_args: Optional[str] = None
        self.program_parameters: Optional[str] = None
        self.main_class: Optional[str] = None
        self.module_name: Optional[str] = None
        self.shorten_command_line: Optional[ShortenCommandLine] = None
        self.include_provided_dependencies: Optional[bool] = None

    def to_map(self) -> dict:
        result = super().to_map()
        result.update({
            "envs": self.envs,
            "workingDirectory": self.working_directory,
            "beforeRun": self.before_run.to_list(),
            "jvmArgs": self.jvm_args,
            "programParameters": self.program_parameters,
            "mainClass": self.main_class,
            "moduleName": self.module_name,
        })
        if self.shorten_command_line is not None:
            result["shortenCommandLine"] = _enum_value(self.shorten_command_line)
        if self.include_provided_dependencies is not None:
            result["includeProvidedDependencies"] = self.include_provided_dependencies
        return result


class JarApplication(RunConfiguration):
    type = "jarApplication"

    def __init__(self, name: str):
        super().__init__(name)
        self.envs: Optional[dict] = None
        self.working_directory: Optional[str] = None
        self.before_run = BeforeRunContainer()
        self.jvm_args: Optional[str] = None
        self.program_parameters: Optional[str] = None
        self.jar_path: Optional[str] = None
        self.module_name: Optional[str] = None

    def to_map(self) -> dict:
        result = super().to_map()
        result.update({
            "envs": self.envs,
            "workingDirectory": self.working_directory,
            "beforeRun": self.before_run.to_list(),
            "jvmArgs": self.jvm_args,
            "programParameters": self.program_parameters,
            "jarPath": self.jar_path,
            "moduleName": self.module_name,
        })
        return result


class Remote(RunConfiguration):
    """Remote JVM debug configuration."""
    type = "remote"

    def __init__(self, name: str):
        super().__init__(name)
        self.mode = RemoteMode.ATTACH
        self.port: Optional[int] = None
        self.transport = RemoteTransport.SOCKET
        self.host: Optional[str] = None
        self.shared_memory_address: Optional[str] = None

    def to_map(self) -> dict:
        result = super().to_map()
        result.update({
            "mode": _enum_value(self.mode),
            "port": self.port,
            "transport": _enum_value(self.transport),
            "host": self.host,
            "sharedMemoryAddress": self.shared_memory_address,
        })
        return result


class JUnit(RunConfiguration):
    type = "junit"

    def __init__(self, name: str):
        super().__init__(name)
        self.directory: Optional[str] = None
        self.repeat: Optional[str] = None
        self.envs: Optional[dict] = None
        self.vm_parameters: Optional[str] = None
        self.category: Optional[str] = None
        self.working_directory: Optional[str] = None
        self.class_name: Optional[str] = None
        self.module_name: Optional[str] = None
        self.pass_parent_envs: Optional[bool] = None
        self.package_name: Optional[str] = None
        self.pattern: Optional[str] = None
        self.method: Optional[str] = None
        self.shorten_command_line: Optional[ShortenCommandLine] = None

    def to_map(self) -> dict:
        result = super().to_map()
        result.update({
            "directory": self.directory,
            "repeat": self.repeat,
            "envs": self.envs,
            "vmParameters": self.vm_parameters,
            "category": self.category,
            "workingDirectory": self.working_directory,
            "className": self.class_name,
            "moduleName": self.module_name,
            "passParentEnvs": self.pass_parent_envs,
            "packageName": self.package_name,
            "pattern": self.pattern,
            "method": self.method,
        })
        if self.shorten_command_line is not None:
            result["shortenCommandLine"] = _enum_value(self.shorten_command_line)
        return result


class TestNG(RunConfiguration):
    type = "testng"
    __test__ = False

    def __init__(self, name: str):
        super().__init__(name)
        self.package_name: Optional[str] = None
        self.class_name: Optional[str] = None
        self.method: Optional[str] = None
        self.group: Optional[str] = None
        self.suite: Optional[str] = None
        self.pattern: Optional[str] = None
        self.working_directory: Optional[str] = None
        self.vm_parameters: Optional[str] = None
        self.pass_parent_envs: Optional[bool] = None
        self.module_name: Optional[str] = None
        self.envs: Optional[dict] = None
        self.shorten_command_line: Optional[ShortenCommandLine] = None

    def to_map(self) -> dict:
        result = super().to_map()
        result.update({
            "package": self.package_name,
            "class": self.class_name,
            "method": self.method,
            "group": self.group,
            "suite": self.suite,
            "pattern": self.pattern,
            "workingDirectory": self.working_directory,
            "vmParameters": self.vm_parameters,
            "passParentEnvs": self.pass_parent_envs,
            "moduleName": self.module_name,
            "envs": self.envs,
        })
        if self.shorten_command_line is not None:
            result["shortenCommandLine"] = _enum_value(self.shorten_command_line)
        return result


class Gradle(RunConfiguration):
    """Runs Gradle tasks from the IDE."""
    type = "gradle"

    def __init__(self, name: str):
        super().__init__(name)
        self.project_path: Optional[str] = None
        self.task_names: list = []
        self.envs: Optional[dict] = None
        self.jvm_args: Optional[str] = None
        self.script_parameters: Optional[str] = None

    def to_map(self) -> dict:
        result = super().to_map()
        result.update({
            "projectPath": self.project_path,
            "taskNames": list(self.task_names),
            "envs": self.envs,
            "jvmArgs": self.jvm_args,
            "scriptParameters": self.script_parameters,
        })
        return result


# Type tag → configuration class, for lookups by string.
RUN_CONFIGURATION_TYPES = {
    cls.type: cls for cls in (Application, JarApplication, Remote, JUnit, TestNG, Gradle)
}


def _resolve_kind(kind: Union[str, type]) -> type:
    if isinstance(kind, str):
        try:
            return RUN_CONFIGURATION_TYPES[kind]
        except KeyError:
            known = ", ".join(sorted(RUN_CONFIGURATION_TYPES))
            raise SettingsError(f"Unknown run configuration type '{kind}' (known: {known})") from None
    return kind


class RunConfigurationContainer:
    """Named run configurations, serialized in creation order."""

    def __init__(self):
        self._configurations = OrderedDict()

    def create(self, name: str, kind, configure: Optional[Callable] = None) -> RunConfiguration:
        """Create a configuration of ``kind`` (class or type tag such as ``"junit"``).

        Raises:
            SettingsError: If the name is taken or the type tag is unknown.
        """
        if name in self._configurations:
            raise SettingsError(f"Run configuration '{name}' already exists")
        cfg = self._configurations[name] = _resolve_kind(kind)(name)
        if configure is not None:
            configure(cfg)
        return cfg

    def defaults(self, kind, configure: Optional[Callable] = None) -> RunConfiguration:
        """Get or create the ``default_<type>`` template for ``kind``.

        The template is serialized with ``defaults: true`` for the IDE to apply
        to configurations of that type; ``create`` does not copy anything from it.
        """
        cls = _resolve_kind(kind)
        name = f"default_{cls.type}"
        cfg = self._configurations.get(name)
        if cfg is None:
            cfg = self._configurations[name] = cls(name)
            cfg.defaults = True
        if configure is not None:
            configure(cfg)
        return cfg

    def get(self, name: str) -> RunConfiguration:
        return self._configurations[name]

    def to_list(self) -> list:
        return [c.to_map() for c in self._configurations.values()]

    def __iter__(self):
        return iter(self._configurations.values())

    def __len__(self):
        return len(self._configurations)
