#!/usr/bin/env python3
"""
Plugin loader for dynamic command discovery and loading
Handles scanning, loading, and registering command plugins
"""

import importlib
import inspect
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from .commands.base_command import BaseCommand


class PluginLoader:
    """Handles dynamic loading and discovery of command plugins"""

    PLUGIN_SUFFIX = "_command"

    def __init__(self, bot, commands_dir: Optional[str] = None,
                 package: str = "convobot.commands"):
        self.bot = bot
        self.logger = bot.logger
        self.commands_dir = commands_dir or os.path.join(os.path.dirname(__file__), 'commands')
        self.package = package
        self.loaded_plugins: Dict[str, BaseCommand] = {}
        self.plugin_metadata: Dict[str, Dict[str, Any]] = {}
        self.keyword_mappings: Dict[str, str] = {}  # keyword -> plugin_name
        self._failed_plugins: Dict[str, str] = {}  # plugin_name -> error_message
        self._disabled_plugins: List[str] = []

    def discover_plugins(self) -> List[str]:
        """Discover the *_command.py files in the commands directory"""
        plugin_files = []
        commands_path = Path(self.commands_dir)

        if not commands_path.exists():
            self.logger.error(f"Commands directory does not exist: {self.commands_dir}")
            return plugin_files

        for file_path in sorted(commands_path.glob(f"*{self.PLUGIN_SUFFIX}.py")):
            if file_path.name != "base_command.py":
                plugin_files.append(file_path.stem)

        self.logger.info(f"Discovered {len(plugin_files)} potential plugin files: {plugin_files}")
        return plugin_files

    def _validate_plugin(self, plugin_class: Type[BaseCommand]) -> List[str]:
        """
        Validate a plugin class has required attributes before instantiation.

        Args:
            plugin_class: The plugin class to validate

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not inspect.iscoroutinefunction(getattr(plugin_class, 'execute', None)):
            errors.append("Plugin 'execute' method must be async")

        if not getattr(plugin_class, 'name', ''):
            errors.append("Plugin 'name' attribute is empty or not set")

        keywords = getattr(plugin_class, 'keywords', None)
        if keywords is not None and not isinstance(keywords, list):
            errors.append("Plugin 'keywords' must be a list")

        return errors

    def load_plugin(self, plugin_name: str) -> Optional[BaseCommand]:
        """Load a single plugin by file name (without .py extension)"""
        module_path = f"{self.package}.{plugin_name}"
        try:
            if module_path in sys.modules:
                module = sys.modules[module_path]
            else:
                module = importlib.import_module(module_path)

            # The command class is the BaseCommand subclass defined in the module itself
            command_class = None
            for _, obj in inspect.getmembers(module, inspect.isclass):
                if (issubclass(obj, BaseCommand) and
                        obj is not BaseCommand and
                        obj.__module__ == module_path):
                    command_class = obj
                    break

            if not command_class:
                error_msg = f"No valid command class found in {plugin_name}"
                self.logger.warning(error_msg)
                self._failed_plugins[plugin_name] = error_msg
                return None

            validation_errors = self._validate_plugin(command_class)
            if validation_errors:
                error_msg = f"Plugin validation failed: {', '.join(validation_errors)}"
                self.logger.error(f"Failed to load plugin '{plugin_name}': {error_msg}")
                self._failed_plugins[plugin_name] = error_msg
                return None

            plugin_instance = command_class(self.bot)
            self.logger.info(f"Successfully loaded plugin: {plugin_instance.name} from {plugin_name}")
            return plugin_instance

        except Exception as e:
            error_msg = str(e)
            self.logger.error(f"Failed to load plugin '{plugin_name}': {error_msg}")
            self._failed_plugins[plugin_name] = error_msg
            return None

    def load_all_plugins(self) -> Dict[str, BaseCommand]:
        """Load all discovered plugins, skipping those disabled in config"""
        loaded_plugins = {}

        for plugin_file in self.discover_plugins():
            plugin_instance = self.load_plugin(plugin_file)
            if not plugin_instance:
                continue

            metadata = plugin_instance.get_metadata()
            plugin_name = metadata['name']
            if not plugin_instance.enabled:
                self.logger.info(f"Plugin '{plugin_name}' disabled in config")
                self._disabled_plugins.append(plugin_name)
                continue

            if plugin_name in loaded_plugins:
                self.logger.warning(f"Duplicate plugin name '{plugin_name}' in {plugin_file}, replacing earlier one")
            loaded_plugins[plugin_name] = plugin_instance
            self.plugin_metadata[plugin_name] = metadata

        for plugin_name, metadata in self.plugin_metadata.items():
            self._build_keyword_mappings(plugin_name, metadata)

        self.loaded_plugins = loaded_plugins

        self.logger.info(f"Loaded {len(loaded_plugins)} plugins: {list(loaded_plugins.keys())}")
        if self._failed_plugins:
            self.logger.warning(f"Failed to load {len(self._failed_plugins)} plugin(s): {list(self._failed_plugins.keys())}")
            for plugin_name, error_msg in self._failed_plugins.items():
                self.logger.warning(f"  - {plugin_name}: {error_msg}")

        return loaded_plugins

    def _build_keyword_mappings(self, plugin_name: str, metadata: Dict[str, Any]):
        """Build keyword to plugin name mappings"""
        self.keyword_mappings[plugin_name.lower()] = plugin_name
        for keyword in metadata.get('keywords', []):
            self.keyword_mappings[keyword.lower()] = plugin_name

    def get_plugin_by_keyword(self, keyword: str) -> Optional[BaseCommand]:
        """Get a plugin instance by keyword"""
        plugin_name = self.keyword_mappings.get(keyword.lower())
        if plugin_name:
            return self.loaded_plugins.get(plugin_name)
        return None

    def get_plugin_by_name(self, name: str) -> Optional[BaseCommand]:
        """Get a plugin instance by name"""
        return self.loaded_plugins.get(name)

    def get_all_plugins(self) -> Dict[str, BaseCommand]:
        """Get all loaded plugins"""
        return self.loaded_plugins.copy()

    def get_failed_plugins(self) -> Dict[str, str]:
        """Return dict of plugins that failed to load with their error messages"""
        return self._failed_plugins.copy()

    def get_disabled_plugins(self) -> List[str]:
        return list(self._disabled_plugins)
