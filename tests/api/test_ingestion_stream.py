"""
Test suite for the WebSocket streaming ingestion endpoint.

System role: Verification of /ws/ingest event protocol
"""


def _ingest(request_id: str, document: dict) -> dict:
    return {"event": "ingest", "data": {"request_id": request_id, "document": document}}


class TestWebSocketIngest:
    """Test suite for WS /api/v1/ws/ingest."""

    def test_stream_should_answer_each_document(self, client, make_document) -> None:
        """Test one result per ingest event, then complete."""
        with client.websocket_connect("/api/v1/ws/ingest") as websocket:
            assert websocket.receive_json() == {"event": "connected", "data": {}}

            for n in range(3):
                doc = make_document(doc_id=f"doc-{n}").model_dump(mode="json")
                websocket.send_json(_ingest(f"req-{n}", doc))
            websocket.send_json({"event": "end"})

            results = [websocket.receive_json() for _ in range(3)]
            complete = websocket.receive_json()

        assert all(r["event"] == "result" for r in results)
        assert {r["data"]["request_id"]: r["data"]["document_id"] for r in results} == {
            "req-0": "doc-0",
            "req-1": "doc-1",
            "req-2": "doc-2",
        }
        assert all(r["data"]["success"] for r in results)
        assert complete == {"event": "complete", "data": {"responses": 3}}

    def test_stream_should_isolate_failures(self, client, fake_transport, make_document) -> None:
        """Test a failed document does not end the stream."""
        fake_transport.timeout_ids = {"doc-1"}

        with client.websocket_connect("/api/v1/ws/ingest") as websocket:
            websocket.receive_json()
            for n in range(2):
                doc = make_document(doc_id=f"doc-{n}").model_dump(mode="json")
                websocket.send_json(_ingest(f"req-{n}", doc))
            websocket.send_json({"event": "end"})

            results = [websocket.receive_json()["data"] for _ in range(2)]
            complete = websocket.receive_json()

        outcomes = {r["request_id"]: (r["success"], r["error_kind"]) for r in results}
        assert outcomes == {"req-0": (True, None), "req-1": (False, "timeout")}
        assert complete["data"]["responses"] == 2

    def test_stream_should_report_malformed_frames(self, client) -> None:
        """Test invalid frames produce error events and the stream continues."""
        with client.websocket_connect("/api/v1/ws/ingest") as websocket:
            websocket.receive_json()

            websocket.send_text("not json")
            invalid_json = websocket.receive_json()

            websocket.send_json({"event": "ingest", "data": {"document": {"doc_id": "x"}}})
            invalid_request = websocket.receive_json()

            websocket.send_json({"event": "shout"})
            unknown = websocket.receive_json()

            websocket.send_json({"event": "ping"})
            pong = websocket.receive_json()

            websocket.send_json({"event": "end"})
            complete = websocket.receive_json()

        assert invalid_json["event"] == "error"
        assert invalid_json["data"]["code"] == "INVALID_JSON"
        assert invalid_request["data"]["code"] == "INVALID_REQUEST"
        assert unknown["data"]["code"] == "UNKNOWN_EVENT"
        assert pong == {"event": "pong"}
        assert complete == {"event": "complete", "data": {"responses": 0}}

    def test_stream_should_fail_request_without_document(self, client) -> None:
        """Test an ingest event without a document yields a failed result."""
        with client.websocket_connect("/api/v1/ws/ingest") as websocket:
            websocket.receive_json()
            websocket.send_json({"event": "ingest", "data": {"request_id": "req-1"}})
            websocket.send_json({"event": "end"})

            result = websocket.receive_json()
            websocket.receive_json()

        assert result["event"] == "result"
        assert result["data"]["request_id"] == "req-1"
        assert result["data"]["success"] is False
        assert result["data"]["message"] == "IngestionRequest has no document."

    def test_stream_should_reject_binary_frames(self, client, make_document) -> None:
        """Test a binary frame produces an error event and the stream continues."""
        with client.websocket_connect("/api/v1/ws/ingest") as websocket:
            websocket.receive_json()

            websocket.send_bytes(b"\x00\x01")
            invalid_frame = websocket.receive_json()

            doc = make_document(doc_id="doc-0").model_dump(mode="json")
            websocket.send_json(_ingest("req-0", doc))
            websocket.send_json({"event": "end"})

            result = websocket.receive_json()
            complete = websocket.receive_json()

        assert invalid_frame["event"] == "error"
        assert invalid_frame["data"]["code"] == "INVALID_FRAME"
        assert result["event"] == "result"
        assert result["data"]["success"] is True
        assert complete == {"event": "complete", "data": {"responses": 1}}
