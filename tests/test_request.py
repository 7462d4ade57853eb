"""
Tests for verifier request body encoding.

Test plan:
- Body is valid JSON with exactly groupId, msg, epidSignature
- Key order matches the service's documented body
- Each field is padded standard base64 that decodes to the input
- Empty inputs encode as empty strings
"""

import base64
import json

from epid_verifier.request import VerificationRequest, encode_request_body

GROUP_ID = b"\x00\x00\x0b\xad"
MSG = b"\x02\xaa\xbb" + bytes(16) + b"hello"
SIG = bytes(range(256)) * 2 + b"\xff"


class TestEncodeRequestBody:
    def test_exact_keys(self) -> None:
        body = json.loads(encode_request_body(GROUP_ID, MSG, SIG))
        assert set(body) == {"groupId", "msg", "epidSignature"}

    def test_key_order(self) -> None:
        body = json.loads(encode_request_body(GROUP_ID, MSG, SIG))
        assert list(body) == ["groupId", "msg", "epidSignature"]

    def test_fields_decode_to_inputs(self) -> None:
        body = json.loads(encode_request_body(GROUP_ID, MSG, SIG))
        assert base64.b64decode(body["groupId"], validate=True) == GROUP_ID
        assert base64.b64decode(body["msg"], validate=True) == MSG
        assert base64.b64decode(body["epidSignature"], validate=True) == SIG

    def test_standard_alphabet_with_padding(self) -> None:
        body = json.loads(encode_request_body(b"\xfb\xff", b"\xfb", b""))
        assert body["groupId"] == "+/8="
        assert body["msg"] == "+w=="
        assert body["epidSignature"] == ""

    def test_compact(self) -> None:
        text = encode_request_body(b"a", b"b", b"c")
        assert text == '{"groupId":"YQ==","msg":"Yg==","epidSignature":"Yw=="}'


class TestVerificationRequest:
    def test_to_json_matches_encode(self) -> None:
        req = VerificationRequest(group_id=GROUP_ID, msg=MSG, epid_signature=SIG)
        assert req.to_json() == encode_request_body(GROUP_ID, MSG, SIG)

    def test_to_dict(self) -> None:
        req = VerificationRequest(group_id=b"a", msg=b"b", epid_signature=b"c")
        assert req.to_dict() == {
            "groupId": "YQ==",
            "msg": "Yg==",
            "epidSignature": "Yw==",
        }
