import json
from unittest import TestCase
from unittest.mock import Mock

from botocore.exceptions import ClientError, NoCredentialsError
from parameterized import parameterized

from ampx.lib.deployed_backend.backend_output import (
    MetadataEntry,
    RawOutput,
    ResolvedOutputGroup,
    StackDescription,
    StackTag,
)
from ampx.lib.deployed_backend.error_classifier import DEFAULT_CLASSIFICATION_RULES, ClassificationRule
from ampx.lib.deployed_backend.exceptions import (
    AccessDeniedError,
    BackendOutputClientError,
    BackendOutputClientErrorType,
    CredentialsError,
    DeploymentInProgressError,
    MetadataRetrievalError,
    NoOutputsFoundError,
    NoStackFoundError,
    SchemaValidationError,
)
from ampx.lib.deployed_backend.stack_metadata_output_retrieval_strategy import (
    BackendOutputResolver,
    StackMetadataBackendOutputRetrievalStrategy,
    resolve_output_group,
    to_stack_output_record,
)


class FakeStackDescriptionProvider:
    def __init__(self, metadata=None, outputs=None, status="CREATE_COMPLETE", tags=None):
        self.metadata = metadata
        self.outputs = outputs
        self.status = status
        self.tags = tags or []
        self.metadata_error = None
        self.outputs_error = None
        self.calls = []

    def get_stack_metadata_blob(self, stack_name):
        self.calls.append(("metadata", stack_name))
        if self.metadata_error:
            raise self.metadata_error
        return self.metadata

    def get_stack_outputs_and_status(self, stack_name):
        self.calls.append(("outputs", stack_name))
        if self.outputs_error:
            raise self.outputs_error
        return StackDescription(outputs=self.outputs, status=self.status, tags=self.tags)


def client_error(code, message="", operation="DescribeStacks"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class TestBackendOutputResolver(TestCase):
    def setUp(self):
        self.metadata = {
            "AWS::Amplify::Auth": {"version": "1", "stackOutputs": ["userPoolId", "authRegion"]},
            "AWS::Amplify::GraphQL": {"version": "1", "stackOutputs": ["awsAppsyncApiEndpoint"]},
        }
        self.outputs = [
            RawOutput("userPoolId", "us-east-1_abc"),
            RawOutput("authRegion", "us-east-1"),
            RawOutput("awsAppsyncApiEndpoint", "https://example.appsync-api.us-east-1.amazonaws.com/graphql"),
        ]
        self.provider = FakeStackDescriptionProvider(metadata=json.dumps(self.metadata), outputs=self.outputs)
        self.resolver = BackendOutputResolver(self.provider)

    def test_resolves_every_group_in_metadata_order(self):
        result = self.resolver.resolve("amplify-app-main-branch-1234567890")

        self.assertEqual(list(result.keys()), ["AWS::Amplify::Auth", "AWS::Amplify::GraphQL"])
        self.assertEqual(
            result["AWS::Amplify::Auth"],
            ResolvedOutputGroup(version="1", payload={"userPoolId": "us-east-1_abc", "authRegion": "us-east-1"}),
        )
        self.assertEqual(
            result["AWS::Amplify::GraphQL"].payload,
            {"awsAppsyncApiEndpoint": "https://example.appsync-api.us-east-1.amazonaws.com/graphql"},
        )

    def test_reads_metadata_before_outputs(self):
        self.resolver.resolve("stack")

        self.assertEqual(self.provider.calls, [("metadata", "stack"), ("outputs", "stack")])

    def test_empty_output_values_are_dropped(self):
        self.provider.metadata = json.dumps({"api": {"version": "1", "stackOutputs": ["ApiUrl", "ApiId"]}})
        self.provider.outputs = [RawOutput("ApiUrl", "https://x"), RawOutput("ApiId", "")]

        result = self.resolver.resolve("stack")

        self.assertEqual(result, {"api": ResolvedOutputGroup(version="1", payload={"ApiUrl": "https://x"})})

    def test_output_names_key_with_empty_value(self):
        self.provider.metadata = json.dumps({"api": {"version": "1", "stackOutputNames": ["ApiUrl", "ApiId"]}})
        self.provider.outputs = [RawOutput("ApiUrl", "https://x"), RawOutput("ApiId", "")]

        result = self.resolver.resolve("stack")

        self.assertEqual(result, {"api": ResolvedOutputGroup(version="1", payload={"ApiUrl": "https://x"})})

    def test_outputs_without_key_are_ignored(self):
        self.provider.metadata = json.dumps({"api": {"version": "1", "stackOutputs": ["ApiUrl"]}})
        self.provider.outputs = [RawOutput(None, "orphan"), RawOutput("ApiUrl", "https://x")]

        result = self.resolver.resolve("stack")

        self.assertEqual(result["api"].payload, {"ApiUrl": "https://x"})

    def test_names_missing_from_outputs_are_excluded(self):
        self.provider.metadata = json.dumps({"api": {"version": "2", "stackOutputs": ["ApiUrl", "NotDeployed"]}})
        self.provider.outputs = [RawOutput("ApiUrl", "https://x")]

        result = self.resolver.resolve("stack")

        self.assertEqual(result["api"], ResolvedOutputGroup(version="2", payload={"ApiUrl": "https://x"}))

    def test_group_without_resolvable_outputs_is_kept_with_empty_payload(self):
        self.provider.metadata = json.dumps({"api": {"version": "1", "stackOutputs": ["Missing"]}})
        self.provider.outputs = []

        result = self.resolver.resolve("stack")

        self.assertEqual(result, {"api": ResolvedOutputGroup(version="1", payload={})})

    def test_unrelated_metadata_is_ignored(self):
        metadata = dict(self.metadata)
        metadata["AWS::CDK::Metadata"] = {"path": "amplify-app/Resource"}
        metadata["cdk_nag"] = "rules"
        self.provider.metadata = json.dumps(metadata)

        result = self.resolver.resolve("stack")

        self.assertEqual(list(result.keys()), ["AWS::Amplify::Auth", "AWS::Amplify::GraphQL"])

    def test_empty_metadata_object_resolves_to_empty_output(self):
        self.provider.metadata = "{}"

        self.assertEqual(self.resolver.resolve("stack"), {})

    def test_repeated_calls_return_identical_results(self):
        first = self.resolver.resolve("stack")
        second = self.resolver.resolve("stack")

        self.assertEqual(first, second)
        self.assertEqual(list(first.keys()), list(second.keys()))

    @parameterized.expand(
        [
            ("version_not_string", {"version": 1, "stackOutputs": ["a"]}),
            ("names_not_list", {"version": "1", "stackOutputs": "a"}),
            ("names_empty", {"version": "1", "stackOutputs": []}),
            ("names_duplicated", {"version": "1", "stackOutputs": ["a", "a"]}),
            ("name_not_string", {"version": "1", "stackOutputs": ["a", 2]}),
        ]
    )
    def test_invalid_entry_fails_schema_validation(self, _, entry):
        self.provider.metadata = json.dumps({"group": entry})

        with self.assertRaises(SchemaValidationError) as ctx:
            self.resolver.resolve("stack")

        self.assertTrue(ctx.exception.violations)
        self.assertTrue(all(violation.startswith("group") for violation in ctx.exception.violations))
        # outputs are never read when the metadata is invalid
        self.assertEqual(self.provider.calls, [("metadata", "stack")])

    def test_schema_validation_lists_every_violation(self):
        self.provider.metadata = json.dumps(
            {
                "first": {"version": 1, "stackOutputs": ["a"]},
                "second": {"version": "1", "stackOutputs": []},
            }
        )

        with self.assertRaises(SchemaValidationError) as ctx:
            self.resolver.resolve("stack")

        self.assertEqual(len(ctx.exception.violations), 2)

    @parameterized.expand([(None,), ("not json",), ("[1, 2]",), ('"a string"',)])
    def test_unusable_metadata_raises_metadata_retrieval_error(self, metadata):
        self.provider.metadata = metadata

        with self.assertRaises(MetadataRetrievalError):
            self.resolver.resolve("stack")

    @parameterized.expand(
        [
            ("CREATE_IN_PROGRESS",),
            ("UPDATE_IN_PROGRESS",),
            ("UPDATE_COMPLETE_CLEANUP_IN_PROGRESS",),
            ("UPDATE_ROLLBACK_IN_PROGRESS",),
        ]
    )
    def test_in_progress_deployment_fails_even_with_outputs(self, status):
        self.provider.status = status

        with self.assertRaises(DeploymentInProgressError):
            self.resolver.resolve("stack")

    def test_in_progress_message_uses_deployment_type_tag(self):
        self.provider.status = "UPDATE_IN_PROGRESS"
        self.provider.tags = [StackTag("amplify:deployment-type", "branch")]

        with self.assertRaises(DeploymentInProgressError) as ctx:
            self.resolver.resolve("stack")

        self.assertIn("This branch deployment is in progress", ctx.exception.message)

    def test_in_progress_message_defaults_to_sandbox(self):
        self.provider.status = "CREATE_IN_PROGRESS"
        self.provider.outputs = None

        with self.assertRaises(DeploymentInProgressError) as ctx:
            self.resolver.resolve("stack")

        self.assertIn("This sandbox deployment is in progress", ctx.exception.message)

    def test_undefined_outputs_raise_no_outputs_found(self):
        self.provider.outputs = None

        with self.assertRaises(NoOutputsFoundError) as ctx:
            self.resolver.resolve("stack")

        self.assertEqual(ctx.exception.message, "Stack outputs are undefined")

    def test_empty_output_list_is_not_an_error(self):
        self.provider.outputs = []

        result = self.resolver.resolve("stack")

        self.assertEqual(result["AWS::Amplify::Auth"].payload, {})

    @parameterized.expand(
        [
            ("expired_token", client_error("ExpiredToken", "token expired"), CredentialsError),
            ("invalid_token", client_error("InvalidClientTokenId", "bad token"), CredentialsError),
            ("no_credentials", NoCredentialsError(), CredentialsError),
            ("access_denied", client_error("AccessDenied", "not allowed"), AccessDeniedError),
            (
                "stack_not_found",
                client_error("ValidationError", "Stack with id stack does not exist"),
                NoStackFoundError,
            ),
        ]
    )
    def test_provider_errors_are_classified_for_both_calls(self, _, error, expected_type):
        self.provider.metadata_error = error
        with self.assertRaises(expected_type) as metadata_ctx:
            self.resolver.resolve("stack")
        self.assertIs(metadata_ctx.exception.__cause__, error)

        self.provider.metadata_error = None
        self.provider.outputs_error = error
        with self.assertRaises(expected_type):
            self.resolver.resolve("stack")

    def test_unclassified_provider_error_is_reraised_unchanged(self):
        error = client_error("ThrottlingException", "Rate exceeded")
        self.provider.outputs_error = error

        with self.assertRaises(ClientError) as ctx:
            self.resolver.resolve("stack")

        self.assertIs(ctx.exception, error)

    def test_taxonomy_errors_from_provider_pass_through(self):
        error = NoStackFoundError("Stack with id stack does not exist")
        self.provider.outputs_error = error

        with self.assertRaises(NoStackFoundError) as ctx:
            self.resolver.resolve("stack")

        self.assertIs(ctx.exception, error)

    def test_custom_rules_extend_the_classification(self):
        class ThrottledError(BackendOutputClientError):
            code = BackendOutputClientErrorType.ACCESS_DENIED

        rule = ClassificationRule(
            matches=lambda error: isinstance(error, ClientError)
            and error.response["Error"]["Code"] == "ThrottlingException",
            build=lambda error, stack_name: ThrottledError(f"{stack_name} throttled"),
        )
        resolver = BackendOutputResolver(
            self.provider, classification_rules=(rule,) + tuple(DEFAULT_CLASSIFICATION_RULES)
        )
        self.provider.outputs_error = client_error("ThrottlingException", "Rate exceeded")

        with self.assertRaises(ThrottledError):
            resolver.resolve("stack")


class TestOutputHelpers(TestCase):
    def test_to_stack_output_record_skips_incomplete_entries(self):
        record = to_stack_output_record(
            [RawOutput("a", "1"), RawOutput(None, "2"), RawOutput("c", None), RawOutput("d", ""), RawOutput("", "5")]
        )

        self.assertEqual(record, {"a": "1"})

    def test_resolve_output_group_follows_declared_names(self):
        group = resolve_output_group(MetadataEntry("1", ("b", "a", "missing")), {"a": "1", "b": "2", "c": "3"})

        self.assertEqual(group, ResolvedOutputGroup("1", {"b": "2", "a": "1"}))
        self.assertEqual(list(group.payload.keys()), ["b", "a"])


class TestStackMetadataBackendOutputRetrievalStrategy(TestCase):
    def test_fetch_resolves_the_stack_named_by_the_resolver(self):
        stack_name_resolver = Mock()
        stack_name_resolver.resolve_main_stack_name.return_value = "amplify-app-main-branch-1234567890"
        resolver = Mock()
        resolver.resolve.return_value = {"group": ResolvedOutputGroup("1", {})}

        strategy = StackMetadataBackendOutputRetrievalStrategy(Mock(), stack_name_resolver, resolver=resolver)

        self.assertEqual(strategy.fetch_backend_output(), {"group": ResolvedOutputGroup("1", {})})
        resolver.resolve.assert_called_once_with("amplify-app-main-branch-1234567890")
