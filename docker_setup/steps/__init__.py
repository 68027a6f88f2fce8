from .step_01_check_privilege import CheckPrivilegeStep
from .step_02_check_platform import CheckPlatformStep
from .step_03_install_prerequisites import InstallPrerequisitesStep
from .step_04_remove_legacy import RemoveLegacyPackagesStep
from .step_05_install_trust_key import InstallTrustKeyStep
from .step_06_register_repository import RegisterRepositoryStep
from .step_07_install_runtime import InstallRuntimeStep
from .step_08_add_user_to_group import AddUserToGroupStep
from .step_09_enable_services import EnableServicesStep
from .step_10_write_daemon_config import WriteDaemonConfigStep
from .step_11_restart_daemon import RestartDaemonStep
from .step_12_verify_runtime import VerifyRuntimeStep
from .step_13_report import ReportStep

__all__ = [
    "CheckPrivilegeStep",
    "CheckPlatformStep",
    "InstallPrerequisitesStep",
    "RemoveLegacyPackagesStep",
    "InstallTrustKeyStep",
    "RegisterRepositoryStep",
    "InstallRuntimeStep",
    "AddUserToGroupStep",
    "EnableServicesStep",
    "WriteDaemonConfigStep",
    "RestartDaemonStep",
    "VerifyRuntimeStep",
    "ReportStep",
]
