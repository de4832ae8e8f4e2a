"""
Generates the client configuration of a deployed backend and writes it to a file
"""

from pathlib import Path
from typing import Optional, Union

from ampx.lib.backend_identifier.identifiers import DeployedBackendIdentifier
from ampx.lib.client_config.client_config_generator import ClientConfigGenerator, ClientConfigVersion
from ampx.lib.client_config.client_config_writer import ClientConfigFormat, ClientConfigWriter
from ampx.lib.deployed_backend.backend_output_client import BackendOutputClient


class ClientConfigGeneratorAdapter:
    def __init__(
        self,
        backend_output_client: BackendOutputClient,
        generator: Optional[ClientConfigGenerator] = None,
        writer: Optional[ClientConfigWriter] = None,
    ):
        self._backend_output_client = backend_output_client
        self._generator = generator or ClientConfigGenerator()
        self._writer = writer or ClientConfigWriter()

    def generate_client_config_to_file(
        self,
        backend_identifier: DeployedBackendIdentifier,
        version: ClientConfigVersion,
        out_dir: Optional[Union[str, Path]] = None,
        config_format: Optional[ClientConfigFormat] = None,
    ) -> Path:
        backend_output = self._backend_output_client.get_output(backend_identifier)
        config = self._generator.generate(backend_output, version)
        return self._writer.write(config, version, out_dir, config_format)
