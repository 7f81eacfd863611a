"""Compiler settings: IDE build process, javac and Groovy compiler excludes."""

from dataclasses import dataclass, field
from typing import Callable, Optional


def _put_set(target: dict, key: str, value):
    if value is not None:
        target[key] = value


@dataclass
class JavacConfiguration:
    """Options passed to javac by the IDE build.

    Attributes:
        prefer_target_jdk_compiler: Use the module's target JDK compiler.
        javac_additional_options: Extra command line options for all modules.
        module_javac_additional_options: Module name to extra options.
        generate_debug_info: ``-g``.
        generate_deprecation_warnings: ``-deprecation``.
        generate_no_warnings: ``-nowarn``.
    """
    prefer_target_jdk_compiler: Optional[bool] = None
    javac_additional_options: Optional[str] = None
    module_javac_additional_options: dict = field(default_factory=dict)
    generate_debug_info: Optional[bool] = None
    generate_deprecation_warnings: Optional[bool] = None
    generate_no_warnings: Optional[bool] = None

    def to_map(self) -> dict:
        result = {}
        _put_set(result, "preferTargetJDKCompiler", self.prefer_target_jdk_compiler)
        _put_set(result, "javacAdditionalOptions", self.javac_additional_options)
        if self.module_javac_additional_options:
            result["moduleJavacAdditionalOptions"] = dict(self.module_javac_additional_options)
        _put_set(result, "generateDebugInfo", self.generate_debug_info)
        _put_set(result, "generateDeprecationWarnings", self.generate_deprecation_warnings)
        _put_set(result, "generateNoWarnings", self.generate_no_warnings)
        return result


@dataclass
class IdeaCompilerConfiguration:
    """IDE compiler settings. Only options that were set are emitted."""
    resource_patterns: Optional[str] = None
    process_heap_size: Optional[int] = None
    auto_show_first_error_in_editor: Optional[bool] = None
    display_notification_popup: Optional[bool] = None
    clear_output_directory: Optional[bool] = None
    add_not_null_assertions: Optional[bool] = None
    enable_automake: Optional[bool] = None
    parallel_compilation: Optional[bool] = None
    rebuild_module_on_dependency_change: Optional[bool] = None
    additional_vm_options: Optional[str] = None
    use_release_option: Optional[bool] = None
    javac_options: JavacConfiguration = field(default_factory=JavacConfiguration)

    def javac(self, configure: Optional[Callable] = None) -> JavacConfiguration:
        if configure is not None:
            configure(self.javac_options)
        return self.javac_options

    def to_map(self) -> dict:
        result = {}
        _put_set(result, "resourcePatterns", self.resource_patterns)
        _put_set(result, "processHeapSize", self.process_heap_size)
        _put_set(result, "autoShowFirstErrorInEditor", self.auto_show_first_error_in_editor)
        _put_set(result, "displayNotificationPopup", self.display_notification_popup)
        _put_set(result, "clearOutputDirectory", self.clear_output_directory)
        _put_set(result, "addNotNullAssertions", self.add_not_null_assertions)
        _put_set(result, "enableAutomake", self.enable_automake)
        _put_set(result, "parallelCompilation", self.parallel_compilation)
        _put_set(result, "rebuildModuleOnDependencyChange", self.rebuild_module_on_dependency_change)
        _put_set(result, "additionalVmOptions", self.additional_vm_options)
        _put_set(result, "useReleaseOption", self.use_release_option)
        javac = self.javac_options.to_map()
        if javac:
            result["javacOptions"] = javac
        return result


class ExcludesConfig:
    """Files and directories excluded from Groovy compilation, in declaration order."""

    def __init__(self):
        self.data = []

    def file(self, path: str):
        self.data.append({"url": path, "includeSubdirectories": False, "isFile": True})

    def dir(self, path: str, include_subdirectories: bool = False):
        self.data.append({"url": path, "includeSubdirectories": include_subdirectories, "isFile": False})


class GroovyCompilerConfiguration:
    def __init__(self):
        self.heap_size: Optional[int] = None
        self.excludes_config = ExcludesConfig()

    def excludes(self, configure: Optional[Callable] = None) -> ExcludesConfig:
        if configure is not None:
            configure(self.excludes_config)
        return self.excludes_config

    def to_map(self) -> dict:
        result = {}
        _put_set(result, "heapSize", self.heap_size)
        result["excludes"] = list(self.excludes_config.data)
        return result
