"""Scaffold configuration: product identity, template source and file layout."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

TEMPLATE_REPO_ENV = "GREYCODE_TEMPLATE_REPO"
PACKAGE_MANAGER_ENV = "GREYCODE_PACKAGE_MANAGER"

__all__ = ["ScaffoldConfig", "BANNER", "TAGLINE", "TEMPLATE_REPO_ENV", "PACKAGE_MANAGER_ENV"]


@dataclass(frozen=True, slots=True)
class ScaffoldConfig:
    """Every literal the scaffold pipeline depends on.

    Passed explicitly into the pipeline so tests (and forks of the template)
    can swap the tool name, template or package manager.
    """

    tool_name: str = "greycodejs"
    product_name: str = "GreyCode.js"
    template_source: str = "kculz/greycodejs"
    package_manager: str = "npm"
    start_script: str = "node app.js"
    dev_script: str = "nodemon app.js"
    cli_runtime: str = "node"
    manifest_name: str = "package.json"
    bin_dir: str = "bin"
    preferred_bin: str = "cli.js"
    env_example_name: str = ".env.example"
    env_name: str = ".env"
    default_description: str = "A new GreyCode.js project"

    @classmethod
    def from_env(cls, template_source: str | None = None) -> "ScaffoldConfig":
        """Build the default config with environment overrides applied.

        Resolution order for the template source:
        1. ``template_source`` argument (``--template`` flag)
        2. ``GREYCODE_TEMPLATE_REPO`` environment variable
        3. the built-in default
        """
        config = cls()
        env_template = (os.environ.get(TEMPLATE_REPO_ENV) or "").strip()
        env_manager = (os.environ.get(PACKAGE_MANAGER_ENV) or "").strip()

        if template_source:
            config = replace(config, template_source=template_source.strip())
        elif env_template:
            config = replace(config, template_source=env_template)
        if env_manager:
            config = replace(config, package_manager=env_manager)
        return config


BANNER = r"""
   ____                  ____          _        _
  / ___|_ __ ___ _   _  / ___|___   __| | ___  (_)___
 | |  _| '__/ _ \ | | || |   / _ \ / _` |/ _ \ | / __|
 | |_| | | |  __/ |_| || |__| (_) | (_| |  __/_| \__ \
  \____|_|  \___|\__, | \____\___/ \__,_|\___(_)/ |___/
                 |___/                        |__/
"""

TAGLINE = "GreyCode.js Framework installer"
