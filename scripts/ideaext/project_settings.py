"""Project-wide IDE settings and the JSON document handed to the IDE."""

import json
from collections import OrderedDict
from typing import Callable, Optional

from .artifact_serializer import artifacts_to_map
from .code_style import CodeStyleConfig
from .compiler_config import GroovyCompilerConfiguration, IdeaCompilerConfiguration
from .copyright_config import CopyrightConfiguration
from .facets import ModuleSettings
from .ide_artifacts import ArtifactContainer
from .project_models import ProjectModel
from .run_configurations import RunConfigurationContainer
from .task_triggers import ActionDelegationConfig, TaskTriggersConfig


class ProjectSettings:
    """All IDE settings of one project.

    Sections are always present as objects so build scripts can configure
    them directly; ``to_map`` only emits sections that were configured.
    """

    def __init__(self, project: ProjectModel):
        self.project = project
        self.code_style = CodeStyleConfig()
        self.compiler = IdeaCompilerConfiguration()
        self.groovy_compiler = GroovyCompilerConfiguration()
        self.copyright = CopyrightConfiguration()
        self.run_configurations = RunConfigurationContainer()
        self.task_triggers = TaskTriggersConfig(project)
        self.delegate_actions = ActionDelegationConfig()
        self.ide_artifacts = ArtifactContainer()
        self.modules = OrderedDict()
        self._configured = set()

    def _section(self, key: str, value, configure: Optional[Callable]):
        self._configured.add(key)
        if configure is not None:
            configure(value)
        return value

    def configure_code_style(self, configure: Optional[Callable] = None) -> CodeStyleConfig:
        return self._section("codeStyle", self.code_style, configure)

    def configure_compiler(self, configure: Optional[Callable] = None) -> IdeaCompilerConfiguration:
        return self._section("compiler", self.compiler, configure)

    def configure_groovy_compiler(self, configure: Optional[Callable] = None) -> GroovyCompilerConfiguration:
        return self._section("groovyCompiler", self.groovy_compiler, configure)

    def configure_copyright(self, configure: Optional[Callable] = None) -> CopyrightConfiguration:
        return self._section("copyright", self.copyright, configure)

    def module(self, name: str, configure: Optional[Callable] = None) -> ModuleSettings:
        settings = self.modules.get(name)
        if settings is None:
            settings = self.modules[name] = ModuleSettings(name)
        if configure is not None:
            configure(settings)
        return settings

    def to_map(self) -> dict:
        """Build the settings document.

        Raises:
            UnknownArtifactError: If an artifact references an unknown artifact.
            UnresolvedConfigurationError: If library files name an unknown configuration.
        """
        result = {}
        if "codeStyle" in self._configured:
            result["codeStyle"] = self.code_style.to_map()
        if "compiler" in self._configured:
            result["compiler"] = self.compiler.to_map()
        if "groovyCompiler" in self._configured:
            result["groovyCompiler"] = self.groovy_compiler.to_map()
        if "copyright" in self._configured:
            result["copyright"] = self.copyright.to_map()
        if len(self.run_configurations):
            result["runConfigurations"] = self.run_configurations.to_list()
        triggers = self.task_triggers.to_map()
        if triggers:
            result["taskTriggers"] = triggers
        delegation = self.delegate_actions.to_map()
        if delegation:
            result["delegateActions"] = delegation
        if len(self.ide_artifacts):
            result["ideArtifacts"] = artifacts_to_map(self.ide_artifacts, self.project)["artifacts"]
        if self.modules:
            result["modules"] = [m.to_map() for m in self.modules.values()]
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_map(), indent=4, ensure_ascii=False)
