# ==============================================
# Tests for DocumentClient and the CLI
# ==============================================
#
# End-to-end flows through the facade, the passthrough
# calls, and the command line entry point.
# ==============================================

import json
import logging
from unittest.mock import patch

import pytest

from conftest import client_error
from offload_store import DocumentClient
from offload_store.cli import main
from offload_store.config import AppConfig, AwsConfig, DocumentConfig
from offload_store.storage.inconsistency import Inconsistency, InconsistencyKind, log_inconsistency


class TestDocumentClient:
    def test_scenario_small(self, client, blob, small_content):
        """bucket b, path p, 10 bytes of text: structured store only."""
        client.put({"Path": "p", "Content": small_content})
        assert client.get("p") == {"Item": {"Path": "p", "Content": small_content}}
        assert blob.calls == []

    def test_scenario_large(self, client, structured, blob, large_content):
        """400 KiB of random bytes: offloaded and reassembled identically."""
        client.put({"Path": "p", "Content": large_content})
        assert structured.calls[0][1][0] == {"Path": "p", "Attributes": {"S3Key": "p"}}
        assert blob.calls == [("put", "p")]

        assert client.get("p")["Item"]["Content"] == large_content

    def test_full_lifecycle(self, client, structured, blob, small_content, large_content):
        client.put({"Path": "p", "Content": small_content})
        client.update("p", lambda item: {**item, "Content": large_content})
        assert "p" in blob.objects

        client.update("p", lambda item: {**item, "Content": small_content})
        assert blob.objects == {}

        response = client.delete("p")
        assert response["Attributes"]["Content"] == small_content
        assert structured.items == {}

    def test_passthrough_untouched(self, client, structured):
        client.batch_get(RequestItems={"t": {"Keys": [{"Path": "p"}]}})
        client.batch_write(RequestItems={})
        client.query(KeyConditionExpression="Path = :p")
        client.scan(Limit=1)

        assert structured.methods_called() == ["batch_get", "batch_write", "query", "scan"]
        assert structured.calls[0][2] == {"RequestItems": {"t": {"Keys": [{"Path": "p"}]}}}

    def test_inconsistencies_reach_handler(self, client, blob, large_content, inconsistencies):
        client.put({"Path": "p", "Content": large_content})
        blob.fail_on["delete"] = client_error("AccessDenied", "DeleteObject")

        client.delete("p")

        assert [i.kind for i in inconsistencies] == [InconsistencyKind.BLOB_DELETE_FAILED]


class TestFromConfig:
    def test_builds_boto3_gateways(self):
        app_config = AppConfig(
            document=DocumentConfig(bucket_name="b"),
            aws=AwsConfig(region="us-east-1", table_name="docs"),
        )
        with patch("offload_store.storage.dynamo_gateway.boto3") as dynamo_boto3, \
                patch("offload_store.storage.s3_gateway.boto3") as s3_boto3:
            client = DocumentClient.from_config(app_config)

            dynamo_boto3.resource.return_value.Table.assert_called_once_with("docs")
            s3_boto3.client.return_value.head_bucket.assert_called_once_with(Bucket="b")
        assert client.config.bucket_name == "b"


class TestLogInconsistency:
    def test_logs_at_error(self, caplog):
        error = client_error("AccessDenied", "DeleteObject")
        with caplog.at_level(logging.ERROR, logger="offload_store.storage.inconsistency"):
            log_inconsistency(Inconsistency(InconsistencyKind.BLOB_DELETE_FAILED, "p", error, "orphan"))

        assert "blob_delete_failed for 'p'" in caplog.text
        assert "orphan" in caplog.text


class TestCli:
    def test_put_and_get(self, client, capsys):
        assert main(["put", "p", "--content", "hello"], client=client) == 0
        capsys.readouterr()

        assert main(["get", "p"], client=client) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["Item"] == {"Path": "p", "Content": "hello"}

    def test_put_from_file(self, client, tmp_path, capsys):
        source = tmp_path / "doc.json"
        source.write_text(json.dumps({"title": "t", "body": "x" * (410 * 1024)}))

        assert main(["put", "p", "--content-file", str(source)], client=client) == 0
        assert client.get("p")["Item"]["Content"]["title"] == "t"
        assert "p" in client.blob.objects

    def test_delete(self, client, capsys):
        client.put({"Path": "p", "Content": "bye"})
        assert main(["delete", "p"], client=client) == 0
        assert json.loads(capsys.readouterr().out)["Attributes"]["Content"] == "bye"

    def test_too_large_exit_code(self, structured, blob, capsys):
        small_client = DocumentClient(structured, blob, DocumentConfig(bucket_name="b", max_document_size=64))
        assert main(["put", "p", "--content", "x" * 100], client=small_client) == 1
        assert "maximum allowed size" in capsys.readouterr().err

    def test_requires_command(self, client):
        with pytest.raises(SystemExit):
            main([], client=client)
