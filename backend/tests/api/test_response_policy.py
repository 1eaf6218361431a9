"""
Tests for the response caching and compression policy.
"""

import gzip
import re

import pytest

from api.middleware.response_policy import (
    EncodingPreference,
    OperationType,
    ResponsePolicyEngine,
    accepts,
    classify_operation,
    compute_etag,
    parse_accept_encoding,
)

QUERY_BODY = {"query": "query { users { data { id } } }"}
MUTATION_BODY = {"query": "mutation { deleteUser(id: \"x\") }"}
RESPONSE = '{"data":{"users":{"data":[]}}}'


class TestClassifyOperation:
    @pytest.mark.parametrize(
        "body, expected",
        [
            ({"query": "query Users { users { data { id } } }"}, OperationType.QUERY),
            ({"query": "  mutation { deleteUser(id: \"x\") }"}, OperationType.MUTATION),
            ({"query": "{ users { data { id } } }"}, OperationType.QUERY),
            ({"query": "{ users { data { id } } }", "operationName": "RunMutation"}, OperationType.MUTATION),
            ({"query": "query Tags { tags }", "operationName": "mutationLike"}, OperationType.MUTATION),
            ({"query": "mutation M { login(email: \"a\") { token } }", "operationName": "M"}, OperationType.MUTATION),
            ({"query": "# delete\nmutation { deleteUser(id: \"x\") }"}, OperationType.MUTATION),
            ({"query": "fragment F on User { id }\nmutation { deleteUser(id: \"x\") }"}, OperationType.MUTATION),
            ({"query": "fragment F on User { id }\nquery { users { data { ...F } } }"}, OperationType.QUERY),
            ({}, OperationType.QUERY),
            (None, OperationType.QUERY),
        ],
    )
    def test_classify(self, body, expected):
        assert classify_operation(body) is expected

    def test_selected_operation_decides(self):
        document = "query Q { tags }\nmutation DoIt { deleteUser(id: \"x\") }"

        assert classify_operation({"query": document, "operationName": "DoIt"}) is OperationType.MUTATION
        assert classify_operation({"query": document, "operationName": "Q"}) is OperationType.QUERY

    @pytest.mark.parametrize(
        "text, expected",
        [("mutation { broken", OperationType.MUTATION), ("query { broken", OperationType.QUERY)],
    )
    def test_unparseable_text_uses_leading_keyword(self, text, expected):
        assert classify_operation({"query": text}) is expected


class TestParseAcceptEncoding:
    def test_sorted_by_quality(self):
        prefs = parse_accept_encoding("deflate;q=0.5, gzip, br;q=0.8")
        assert [p.encoding for p in prefs] == ["gzip", "br", "deflate"]
        assert [p.quality for p in prefs] == [1.0, 0.8, 0.5]

    def test_missing_weight_is_one(self):
        assert parse_accept_encoding("gzip") == [EncodingPreference("gzip", 1.0)]

    @pytest.mark.parametrize("header", ["gzip;q=abc", "gzip;q=nan"])
    def test_unparseable_weight_is_one(self, header):
        assert parse_accept_encoding(header) == [EncodingPreference("gzip", 1.0)]

    def test_equal_weights_keep_header_order(self):
        prefs = parse_accept_encoding("br, gzip, deflate")
        assert [p.encoding for p in prefs] == ["br", "gzip", "deflate"]

    @pytest.mark.parametrize("header", [None, ""])
    def test_empty(self, header):
        assert parse_accept_encoding(header) == []


class TestAccepts:
    @pytest.mark.parametrize(
        "header, expected",
        [("gzip", True), ("GZIP", True), ("*", True), ("gzip;q=0", False),
         ("br, deflate", False), ("identity", False), ("", False),
         ("gzip;q=0, *", False), ("*;q=0, gzip;q=0.5", True), ("br, *;q=0", False)],
    )
    def test_gzip(self, header, expected):
        assert accepts(parse_accept_encoding(header), "gzip") is expected


class TestComputeEtag:
    def test_known_value(self):
        assert compute_etag("abc") == '"17862"'

    def test_hashes_utf16_code_units(self):
        """A non-BMP character contributes both surrogate halves."""
        assert compute_etag("\U0001F600") == '"1b0d63"'

    def test_equal_bodies_equal_tags(self):
        assert compute_etag(RESPONSE) == compute_etag(RESPONSE)

    def test_different_bodies_different_tags(self):
        assert compute_etag('{"data":{"tags":["a"]}}') != compute_etag('{"data":{"tags":["b"]}}')

    def test_signed_hex_format(self):
        for body in (RESPONSE, "x" * 500, "é" * 40):
            assert re.fullmatch(r'"-?[0-9a-f]+"', compute_etag(body))

    def test_wraps_to_negative(self):
        """Long bodies overflow 32 bits and may render with a minus sign."""
        tags = {compute_etag("z" * n) for n in range(1, 40)}
        assert any(tag.startswith('"-') for tag in tags)

    def test_empty_body_has_no_tag(self):
        assert compute_etag("") == ""


class TestResponsePolicyEngine:
    @pytest.fixture
    def engine(self):
        return ResponsePolicyEngine(max_age=300)

    def test_successful_query(self, engine):
        policy = engine.decide("POST", QUERY_BODY, {"accept-encoding": "gzip"}, RESPONSE, False)

        assert policy.operation_type is OperationType.QUERY
        assert policy.headers["Cache-Control"] == "public, max-age=300"
        assert policy.headers["Vary"] == "Accept, Origin, Accept-Encoding, Accept-Language"
        assert policy.headers["ETag"] == compute_etag(RESPONSE)
        assert policy.compress is True

    def test_mutation_is_never_cached(self, engine):
        policy = engine.decide("POST", MUTATION_BODY, {"accept-encoding": "gzip"}, RESPONSE, False)

        assert policy.operation_type is OperationType.MUTATION
        assert policy.headers == {"Cache-Control": "no-store"}
        assert policy.compress is False

    def test_failed_query_is_not_cached(self, engine):
        policy = engine.decide("POST", QUERY_BODY, {"accept-encoding": "gzip"}, RESPONSE, True)

        assert policy.headers == {"Cache-Control": "no-store"}
        assert policy.compress is False

    def test_no_gzip_without_client_support(self, engine):
        policy = engine.decide("POST", QUERY_BODY, {"accept-encoding": "br"}, RESPONSE, False)

        assert policy.compress is False
        assert policy.headers["Cache-Control"] == "public, max-age=300"

    def test_refused_gzip_beats_wildcard(self, engine):
        policy = engine.decide("POST", {"query": "{ tags }"}, {"accept-encoding": "gzip;q=0, *"}, "{}", False)
        assert policy.compress is False

    def test_mixed_document_uses_selected_operation(self, engine):
        body = {"query": "query Q { tags }\nmutation DoIt { deleteUser(id: \"x\") }", "operationName": "DoIt"}

        policy = engine.decide("POST", body, {"accept-encoding": "gzip"}, RESPONSE, False)

        assert policy.operation_type is OperationType.MUTATION
        assert policy.headers == {"Cache-Control": "no-store"}
        assert policy.compress is False

    def test_options_is_never_compressed(self, engine):
        policy = engine.decide("OPTIONS", QUERY_BODY, {"accept-encoding": "gzip"}, RESPONSE, False)
        assert policy.compress is False

    def test_min_size(self):
        engine = ResponsePolicyEngine(min_size=1024)
        policy = engine.decide("POST", QUERY_BODY, {"accept-encoding": "gzip"}, RESPONSE, False)
        assert policy.compress is False

    def test_max_age_is_configurable(self):
        assert ResponsePolicyEngine(max_age=60).cache_directive == "public, max-age=60"

    def test_compress_is_gzip(self, engine):
        payload = RESPONSE.encode("utf-8")
        assert gzip.decompress(engine.compress(payload)) == payload
