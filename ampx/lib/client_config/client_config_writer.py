"""
Writes a client configuration to disk in one of the supported formats
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ampx.lib.client_config.client_config_generator import ClientConfigVersion

LOG = logging.getLogger(__name__)

OUTPUTS_FILE_NAME = "amplify_outputs"
LEGACY_CONFIGURATION_FILE_NAME = "amplifyconfiguration"


class ClientConfigFormat(str, Enum):
    JSON = "json"
    MJS = "mjs"
    TS = "ts"
    DART = "dart"


def _render(config: Dict[str, Any], config_format: ClientConfigFormat) -> str:
    body = json.dumps(config, indent=2)
    if config_format in (ClientConfigFormat.MJS, ClientConfigFormat.TS):
        return f"const amplifyConfig = {body};\n\nexport default amplifyConfig;\n"
    if config_format == ClientConfigFormat.DART:
        return f"const amplifyConfig = r'''{body}''';\n"
    return body + "\n"


def get_client_config_file_name(version: ClientConfigVersion, config_format: ClientConfigFormat) -> str:
    base_name = OUTPUTS_FILE_NAME if version == ClientConfigVersion.V1 else LEGACY_CONFIGURATION_FILE_NAME
    return f"{base_name}.{config_format.value}"


class ClientConfigWriter:
    def write(
        self,
        config: Dict[str, Any],
        version: ClientConfigVersion,
        out_dir: Optional[Union[str, Path]] = None,
        config_format: Optional[ClientConfigFormat] = None,
    ) -> Path:
        """
        Writes the configuration and returns the path of the written file.

        The directory defaults to the current working directory and the format to json.
        """
        config_format = ClientConfigFormat(config_format or ClientConfigFormat.JSON)
        target_dir = Path(out_dir) if out_dir else Path.cwd()
        target_dir.mkdir(parents=True, exist_ok=True)

        target = target_dir / get_client_config_file_name(ClientConfigVersion(version), config_format)
        target.write_text(_render(config, config_format), encoding="utf-8")
        LOG.debug("Client config written to %s", target)
        return target
