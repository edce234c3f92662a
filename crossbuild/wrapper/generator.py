"""
Wrapper script generator.

Generates ``build-<target>.sh``, a self-contained shell script equivalent to
``crossbuild build`` for the current configuration.
"""

import logging
import re
import shlex
from pathlib import Path
from typing import Optional

from crossbuild.build.runner import build_command, target_environment
from crossbuild.config.parser import CrossBuildConfig
from crossbuild.core.exceptions import ScriptGenerationError
from crossbuild.cross.targets import parse_target_triple

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "build.sh.j2"

_ENV_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class WrapperScriptGenerator:
    """Render and write the standalone wrapper script."""

    def __init__(
        self, config: CrossBuildConfig, template_dir: Optional[Path] = None
    ):
        """
        Initialize wrapper script generator.

        Args:
            config: Effective configuration
            template_dir: Optional directory overriding the built-in templates
        """
        self.config = config
        self.template_dir = template_dir
        self._jinja_env = self._init_jinja2()

    def _init_jinja2(self):
        """
        Initialize Jinja2 template environment.

        Raises:
            ScriptGenerationError: If the template directory does not exist
        """
        from jinja2 import Environment, FileSystemLoader

        if self.template_dir:
            template_dir = Path(self.template_dir)
        else:
            template_dir = Path(__file__).parent / "templates"

        if not template_dir.exists():
            raise ScriptGenerationError(
                f"Template directory not found: {template_dir}"
            )

        jinja_env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        jinja_env.filters["shquote"] = shlex.quote

        logger.debug(f"Jinja2 templates initialized from: {template_dir}")
        return jinja_env

    @property
    def default_filename(self) -> str:
        return f"build-{self.config.target}.sh"

    def _sysroot_expression(self) -> str:
        if self.config.sysroot.startswith("/"):
            return shlex.quote(self.config.sysroot)
        return "${HOME}/" + shlex.quote(self.config.sysroot)

    def render(self) -> str:
        """
        Render the wrapper script.

        Returns:
            Script content

        Raises:
            ScriptGenerationError: If an environment variable name is not a
                valid shell identifier or rendering fails
        """
        env_vars = target_environment(self.config)
        env_vars.update(self.config.env)

        for name in env_vars:
            if not _ENV_NAME.match(name):
                raise ScriptGenerationError(
                    f"Cannot export {name!r}: not a valid shell variable name"
                )

        command = build_command(
            parse_target_triple(self.config.target),
            tool=self.config.tool,
            subcommand=self.config.subcommand,
            extra_args=self.config.args,
        )

        try:
            template = self._jinja_env.get_template(TEMPLATE_NAME)
            return template.render(
                sysroot=self._sysroot_expression(),
                pkg_config_path=self.config.pkg_config_path,
                env_vars=env_vars,
                command=command,
            )
        except Exception as e:
            raise ScriptGenerationError(
                f"Failed to render template {TEMPLATE_NAME}: {e}"
            ) from e

    def write(self, output: Path, force: bool = False) -> Path:
        """
        Write the rendered script and make it executable.

        Args:
            output: Destination file
            force: Overwrite an existing file

        Returns:
            Path to the written script

        Raises:
            ScriptGenerationError: If the file exists and force is False, or
                writing fails
        """
        if output.exists() and not force:
            raise ScriptGenerationError(
                f"{output} already exists (use --force to overwrite)"
            )

        content = self.render()
        try:
            output.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ScriptGenerationError(f"Failed to write {output}: {e}") from e

        try:
            output.chmod(0o755)
            logger.debug(f"Made script executable: {output}")
        except OSError as e:
            logger.warning(f"Could not make script executable: {e}")

        logger.info(f"Generated wrapper script: {output}")
        return output
