# ==============================================
# Tests for SizeEvaluator
# ==============================================

import pytest

from offload_store.analysis.decision import Backend
from offload_store.analysis.size_evaluator import STRUCTURED_ITEM_LIMIT, SizeEvaluator
from offload_store.errors import DocumentTooLargeError


@pytest.fixture
def evaluator():
    return SizeEvaluator(max_document_size=5 * 1024 * 1024)


class TestMeasure:
    def test_string_attribute(self, evaluator):
        assert evaluator.measure({"Path": "p"}) == len('{"Path":{"S":"p"}}')

    def test_number_and_float(self, evaluator):
        assert evaluator.measure({"n": 1.5}) == len('{"n":{"N":"1.5"}}')
        assert evaluator.measure({"n": 12}) == len('{"n":{"N":"12"}}')

    def test_bool_and_null(self, evaluator):
        assert evaluator.measure({"b": True}) == len('{"b":{"BOOL":true}}')
        assert evaluator.measure({"x": None}) == len('{"x":{"NULL":true}}')

    def test_binary_is_base64(self, evaluator):
        assert evaluator.measure({"b": b"abc"}) == len('{"b":{"B":"YWJj"}}')

    def test_nested_map_and_list(self, evaluator):
        record = {"m": {"k": [1, "a"]}}
        assert evaluator.measure(record) == len('{"m":{"M":{"k":{"L":[{"N":"1"},{"S":"a"}]}}}}')

    def test_utf8_bytes_not_characters(self, evaluator):
        assert evaluator.measure({"s": "é"}) == len('{"s":{"S":"é"}}'.encode("utf-8"))

    def test_rejects_non_dict(self, evaluator):
        with pytest.raises(TypeError):
            evaluator.measure(["not", "a", "record"])


class TestClassify:
    def test_structured_limit_is_400_kib(self):
        assert STRUCTURED_ITEM_LIMIT == 400 * 1024

    def test_small_stays_structured(self, evaluator):
        decision = evaluator.classify({"Path": "p", "Content": "ten bytes!"})
        assert decision.backend is Backend.STRUCTURED
        assert not decision.use_blob_store
        assert not decision.oversize_absolute

    def test_over_structured_limit_uses_blob(self, evaluator):
        decision = evaluator.classify({"Path": "p", "Content": "x" * STRUCTURED_ITEM_LIMIT})
        assert decision.backend is Backend.BLOB
        assert decision.use_blob_store
        assert not decision.oversize_absolute

    def test_boundaries(self):
        evaluator = SizeEvaluator(max_document_size=60, structured_limit=40)
        base = {"c": ""}
        base_size = evaluator.measure(base)

        at_limit = {"c": "x" * (40 - base_size)}
        assert evaluator.measure(at_limit) == 40
        assert not evaluator.classify(at_limit).oversize_structured

        over_limit = {"c": "x" * (41 - base_size)}
        assert evaluator.classify(over_limit).oversize_structured

        at_max = {"c": "x" * (60 - base_size)}
        assert not evaluator.classify(at_max).oversize_absolute
        assert evaluator.classify({"c": "x" * (61 - base_size)}).oversize_absolute

    def test_classify_never_raises(self):
        evaluator = SizeEvaluator(max_document_size=10)
        assert evaluator.classify({"c": "x" * 100}).oversize_absolute


class TestEvaluate:
    def test_too_large(self):
        evaluator = SizeEvaluator(max_document_size=10)
        with pytest.raises(DocumentTooLargeError) as exc_info:
            evaluator.evaluate({"c": "x" * 100})
        assert exc_info.value.limit == 10
        assert exc_info.value.size > 10

    def test_returns_decision(self, evaluator):
        decision = evaluator.evaluate({"Path": "p"})
        assert decision.size == evaluator.measure({"Path": "p"})
        assert decision.to_dict()["backend"] == "structured"
