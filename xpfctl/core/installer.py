"""Install orchestrator: fetch, place and register the proxy service."""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional

from ..exceptions import FileSystemError, ServiceManagerError, XpfError
from ..models.install import InstallationOutcome, InstallStage
from ..utils.constants import CONFIG_MODE, EXECUTABLE_MODE
from .config_manager import ConfigManager
from .fetcher import ArtifactFetcher
from .helper_writer import HelperScriptWriter
from .lifecycle import LifecycleController
from .unit_writer import UnitWriter

logger = logging.getLogger(__name__)


class InstallOrchestrator:
    """Runs one install end to end, stopping at the first failed stage.

    Every stage is idempotent, so rerunning the orchestrator is the
    recovery path after a failure. Nothing is rolled back.
    """

    def __init__(self, config_manager: ConfigManager,
                 controller: Optional[LifecycleController] = None,
                 fetcher: Optional[ArtifactFetcher] = None,
                 interpreter: Optional[str] = None):
        """Initialize the orchestrator.

        Args:
            config_manager: Loaded settings
            controller: Lifecycle controller for the service
            fetcher: Artifact fetcher, built from repo_url by default
            interpreter: Python interpreter written into the helper command
        """
        self.config_manager = config_manager
        self.target = config_manager.build_target()
        self.definition = config_manager.build_service_definition()
        self.controller = controller or LifecycleController(
            self.target.service_name,
            log_lines=config_manager.get_setting("log_lines"),
        )
        self.fetcher = fetcher or ArtifactFetcher(config_manager.get_setting("repo_url"))
        self.interpreter = interpreter

        self.unit_dir = Path(config_manager.get_setting("unit_dir"))
        self.helper_dir = Path(config_manager.get_setting("helper_dir"))
        self.install_helper = bool(config_manager.get_setting("install_helper"))

        self.completed: List[InstallStage] = []
        self._staging_dir: Optional[Path] = None
        self._staged_artifact: Optional[Path] = None
        self._staged_config: Optional[Path] = None

    def stages(self):
        """Return the (stage, step) pairs of this run, in order."""
        steps = [
            (InstallStage.FETCH, self._fetch_artifacts),
            (InstallStage.STOP_PREVIOUS, self._stop_previous),
            (InstallStage.DIRECTORY_CREATION, self._ensure_directory),
            (InstallStage.PLACEMENT, self._place_files),
            (InstallStage.PERMISSIONS, self._set_modes),
            (InstallStage.UNIT_WRITE, self._write_unit),
        ]
        if self.install_helper:
            steps.append((InstallStage.HELPER_WRITE, self._write_helper))
        steps.append((InstallStage.ENABLE, self._start_and_enable))
        return steps

    def run(self) -> InstallationOutcome:
        """Run every stage in order.

        Returns:
            InstallationOutcome, failed at the first stage that raised
        """
        self.completed = []
        try:
            for stage, step in self.stages():
                try:
                    step()
                except OSError as e:
                    raise FileSystemError(str(e), stage=stage) from e
                except XpfError as e:
                    if e.stage is None:
                        e.stage = stage
                    raise
                self.completed.append(stage)

        except XpfError as e:
            logger.error(f"Installation failed at stage '{e.stage.value}': {e.message}")
            return InstallationOutcome.failed(e.stage, e.message)

        finally:
            self._cleanup_staging()

        logger.info("Installation complete")
        return InstallationOutcome.succeeded()

    def _fetch_artifacts(self):
        """Download both artifacts into a fresh staging directory.

        The install directory is not touched until both downloads succeed.
        """
        logger.info(f"Downloading files from {self.fetcher.base_url}")
        staging_root = self.config_manager.get_setting("staging_dir")
        self._staging_dir = Path(tempfile.mkdtemp(prefix="xpfctl-", dir=staging_root))

        self._staged_artifact = self.fetcher.fetch_to(self.target.executable_name, self._staging_dir)
        self._staged_config = self.fetcher.fetch_to(self.target.config_name, self._staging_dir)
        logger.info("Files downloaded")

    def _stop_previous(self):
        """Stop a running previous instance. Failure only warns."""
        if not self.controller.is_active():
            logger.debug(f"No running {self.target.service_name} instance")
            return

        logger.info(f"Previous {self.target.service_name} service is running, stopping it")
        success, error = self.controller.stop()
        if not success:
            logger.warning(f"Could not stop previous instance, continuing: {error}")

    def _ensure_directory(self):
        logger.info(f"Creating install directory: {self.target.install_dir}")
        self.target.install_dir.mkdir(parents=True, exist_ok=True)

    def _place_files(self):
        logger.info(f"Moving files to {self.target.install_dir}")
        self._move_into_place(self._staged_artifact, self.target.artifact_path)
        self._move_into_place(self._staged_config, self.target.config_path)

    def _set_modes(self):
        logger.info("Setting file permissions")
        self.target.artifact_path.chmod(EXECUTABLE_MODE)
        self.target.config_path.chmod(CONFIG_MODE)

    def _write_unit(self):
        logger.info("Writing systemd unit")
        self.unit_dir.mkdir(parents=True, exist_ok=True)
        UnitWriter.write_unit(self.definition, self.unit_dir)

        success, error = self.controller.reload_units()
        if not success:
            raise ServiceManagerError(f"systemctl daemon-reload failed: {error}")

    def _write_helper(self):
        logger.info("Installing operations menu command")
        HelperScriptWriter.write_helper_script(
            self.target.service_name,
            self.helper_dir,
            self.interpreter,
        )

    def _start_and_enable(self):
        self.controller.start_and_enable()
        status = self.controller.current_status()
        logger.info(f"Service {self.target.service_name} is {status.value}")

    @staticmethod
    def _move_into_place(staged: Path, destination: Path):
        """Move a staged file over its destination, replacing any old version."""
        temp_file = destination.with_name(f".{destination.name}.new")
        shutil.move(str(staged), str(temp_file))
        os.replace(temp_file, destination)

    def _cleanup_staging(self):
        if self._staging_dir is not None:
            shutil.rmtree(self._staging_dir, ignore_errors=True)
            self._staging_dir = None
