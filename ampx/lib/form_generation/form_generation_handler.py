"""
Generates GraphQL documents and React forms from the model schema of a deployed backend
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import urlparse

from botocore.exceptions import BotoCoreError, ClientError

from ampx.commands.exceptions import AmplifyUserError
from ampx.lib.form_generation.form_renderer import render_form
from ampx.lib.form_generation.graphql_statements import render_mutations, render_queries
from ampx.lib.form_generation.model_schema import ModelDefinition, ModelSchemaError, parse_models

LOG = logging.getLogger(__name__)

DEFAULT_UI_OUT_DIR = "ui-components"
SCHEMA_FILE_NAME = "schema.graphql"
QUERIES_FILE_NAME = "queries.js"
MUTATIONS_FILE_NAME = "mutations.js"
INDEX_FILE_NAME = "index.js"


class FormGenerationError(AmplifyUserError):
    pass


def parse_s3_uri(uri: str) -> Tuple[str, str]:
    parsed = urlparse(uri)
    bucket, key = parsed.netloc, parsed.path.lstrip("/")
    if parsed.scheme != "s3" or not bucket or not key:
        raise FormGenerationError(
            "InvalidModelSchemaUriError",
            message=f"The model schema location '{uri}' is not a valid S3 URI.",
            resolution="Redeploy the backend so the model schema location is refreshed.",
        )
    return bucket, key


class FormGenerationHandler:
    def __init__(self, s3_client: Any):
        self._s3_client = s3_client

    def download_model_schema(self, schema_uri: str) -> str:
        bucket, key = parse_s3_uri(schema_uri)
        LOG.debug("Downloading model schema from bucket %s, key %s", bucket, key)
        try:
            response = self._s3_client.get_object(Bucket=bucket, Key=key)
            return str(response["Body"].read().decode("utf-8"))
        except (ClientError, BotoCoreError) as ex:
            raise FormGenerationError(
                "ModelSchemaDownloadError",
                message=f"Failed to download the model schema from {schema_uri}: {ex}",
                resolution="Ensure your credentials allow s3:GetObject on the deployment bucket.",
                wrapped_from=ex,
            ) from ex

    def generate(
        self,
        models_out_dir: str,
        ui_out_dir: str,
        api_url: str,
        models_filter: Optional[Sequence[str]] = None,
    ) -> List[Path]:
        """
        Writes the schema, queries and mutations to models_out_dir and one create form and one update form
        per model to ui_out_dir

        Parameters
        ----------
        models_out_dir: str
            Directory receiving schema.graphql, queries.js and mutations.js
        ui_out_dir: str
            Directory receiving the forms
        api_url: str
            S3 URI of the model schema
        models_filter: Optional[Sequence[str]]
            Names of the models to generate forms for, all models when empty

        Returns
        -------
        List[Path]
            Written files
        """
        schema = self.download_model_schema(api_url)
        try:
            models = parse_models(schema)
        except ModelSchemaError as ex:
            raise FormGenerationError(
                "InvalidModelSchemaError",
                message=f"The model schema downloaded from {api_url} is not valid GraphQL: {ex}",
                resolution="Fix the data schema of the backend and redeploy it.",
                wrapped_from=ex,
            ) from ex
        selected = self._select_models(models, models_filter)

        models_dir = Path(models_out_dir)
        written = [
            _write(models_dir / SCHEMA_FILE_NAME, schema),
            _write(models_dir / QUERIES_FILE_NAME, render_queries(models)),
            _write(models_dir / MUTATIONS_FILE_NAME, render_mutations(models)),
        ]

        ui_dir = Path(ui_out_dir)
        exports = []
        for model in selected:
            for is_update in (False, True):
                component = f"{model.name}{'UpdateForm' if is_update else 'CreateForm'}"
                written.append(_write(ui_dir / f"{component}.jsx", render_form(model, is_update)))
                exports.append(f'export {{ default as {component} }} from "./{component}";')
        written.append(_write(ui_dir / INDEX_FILE_NAME, "\n".join(exports) + "\n"))
        return written

    @staticmethod
    def _select_models(models: List[ModelDefinition], models_filter: Optional[Sequence[str]]) -> List[ModelDefinition]:
        if not models_filter:
            return models
        by_name: Dict[str, ModelDefinition] = {model.name: model for model in models}
        unknown = [name for name in models_filter if name not in by_name]
        if unknown:
            raise FormGenerationError(
                "ModelNotFoundError",
                message=f"Models {', '.join(unknown)} are not defined in the schema.",
                resolution=f"Choose from the available models: {', '.join(by_name) or 'none'}.",
            )
        return [by_name[name] for name in models_filter]


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    LOG.debug("Wrote %s", path)
    return path
