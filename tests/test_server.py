"""API tests for the solve endpoint, the upload page and health."""
import asyncio
import io

from fastapi.testclient import TestClient
from starlette.datastructures import UploadFile
from starlette.requests import Request

from agents.gemini_client import GeminiAPIError
from api import server

from conftest import FakeGeminiClient


PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-data"


def _upload(name="question.png", data=PNG_BYTES, content_type="image/png"):
    return {"imageFile": (name, data, content_type)}


def test_solve_success(client, install_solver):
    vision = FakeGeminiClient("1. 2 + 3 = ?\n① 4 ② 5")
    text = FakeGeminiClient(
        '```json\n{"question": "2 + 3 = ?", "options": ["4", "5"]}\n```',
        '```json\n{"answer": "5", "explanation": "2와 3을 더하면 5입니다."}\n```'
    )
    install_solver(vision, text)

    resp = client.post("/api/solve", files=_upload())

    assert resp.status_code == 200
    assert resp.json() == {
        "message": "분석 완료",
        "extracted_text": "1. 2 + 3 = ?\n① 4 ② 5",
        "parsed_data": {"question": "2 + 3 = ?", "options": ["4", "5"]},
        "solution": {"answer": "5", "explanation": "2와 3을 더하면 5입니다."}
    }
    assert resp.headers["X-Request-ID"]
    assert vision.calls[0][1] == {"mime_type": "image/png", "data": PNG_BYTES}


def test_missing_image_returns_400(client, install_solver):
    install_solver(FakeGeminiClient(), FakeGeminiClient())

    resp = client.post("/api/solve", files={"other": ("notes.txt", b"x", "text/plain")})

    assert resp.status_code == 400
    assert resp.json()["error"] == "이미지 파일이 필요합니다."


def test_empty_image_returns_400(client, install_solver):
    vision = FakeGeminiClient()
    install_solver(vision, FakeGeminiClient())

    resp = client.post("/api/solve", files=_upload(data=b""))

    assert resp.status_code == 400
    assert resp.json()["error"] == "이미지 파일이 필요합니다."
    assert vision.calls == []


def test_oversized_image_returns_413(client, install_solver):
    vision = FakeGeminiClient()
    install_solver(vision, FakeGeminiClient(), maxUploadBytes=4)

    resp = client.post("/api/solve", files=_upload())

    assert resp.status_code == 413
    assert resp.json()["error"] == "이미지 파일이 너무 큽니다."
    assert vision.calls == []


def test_generic_content_type_is_guessed_from_filename(client, install_solver):
    vision = FakeGeminiClient("text")
    text = FakeGeminiClient('{"question": "q", "options": []}', '{"answer": "a", "explanation": "e"}')
    install_solver(vision, text)

    resp = client.post("/api/solve", files=_upload(name="scan.png", content_type="application/octet-stream"))

    assert resp.status_code == 200
    assert vision.calls[0][1]["mime_type"] == "image/png"


def test_extraction_failure_returns_500(client, install_solver):
    text = FakeGeminiClient()
    install_solver(FakeGeminiClient(GeminiAPIError("API key not valid")), text)

    resp = client.post("/api/solve", files=_upload())

    assert resp.status_code == 500
    assert resp.json()["error"] == "이미지에서 텍스트 추출 실패: API key not valid"
    assert text.calls == []


def test_solve_failure_still_returns_200(client, install_solver):
    vision = FakeGeminiClient("문제 텍스트")
    text = FakeGeminiClient('{"question": "q", "options": ["a", "b"]}', GeminiAPIError("overloaded"))
    install_solver(vision, text)

    resp = client.post("/api/solve", files=_upload())

    assert resp.status_code == 200
    assert resp.json()["solution"] == {
        "answer": "풀이 실패",
        "explanation": "AI가 정답 및 해설 생성에 실패했습니다: overloaded"
    }


def test_unhandled_error_returns_500(monkeypatch, install_solver):
    processor = install_solver(FakeGeminiClient(), FakeGeminiClient())

    async def broken_process(image_bytes, mime_type):
        raise RuntimeError("disk full")

    monkeypatch.setattr(processor, "process", broken_process)
    client = TestClient(server.app, raise_server_exceptions=False)

    resp = client.post("/api/solve", files=_upload())

    assert resp.status_code == 500
    assert resp.json()["error"] == "서버 내부 오류 발생: disk full"
    assert resp.headers["X-Request-ID"] == resp.json()["request_id"]


def test_not_ready_returns_503(client, monkeypatch):
    monkeypatch.setattr(server, "solve_processor", None)
    monkeypatch.setattr(server, "system_config", None)

    resp = client.post("/api/solve", files=_upload())

    assert resp.status_code == 503
    assert "error" in resp.json()


def test_index_page(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert '"imageFile"' in resp.text
    assert "/api/solve" in resp.text
    assert 'accept="image/*"' in resp.text
    assert "!data.extracted_text && !data.parsed_data && !data.solution" in resp.text


def test_health(client, install_solver):
    install_solver(FakeGeminiClient(), FakeGeminiClient())

    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "ready": True, "version": "1.0.0"}


def test_text_field_instead_of_file_returns_400(client, install_solver):
    install_solver(FakeGeminiClient(), FakeGeminiClient())

    resp = client.post("/api/solve", data={"imageFile": "not-a-file"})

    assert resp.status_code == 400
    assert resp.json()["error"] == "이미지 파일이 필요합니다."
    assert resp.headers["X-Request-ID"]


def test_non_multipart_body_returns_400(client, install_solver):
    install_solver(FakeGeminiClient(), FakeGeminiClient())

    resp = client.post("/api/solve", json={"imageFile": "x"})

    assert resp.status_code == 400
    assert resp.json()["error"] == "이미지 파일이 필요합니다."


def test_non_image_filename_falls_back_to_default_type(client, install_solver):
    vision = FakeGeminiClient("text")
    text = FakeGeminiClient('{"question": "q", "options": []}', '{"answer": "a", "explanation": "e"}')
    install_solver(vision, text)

    resp = client.post("/api/solve", files=_upload(name="doc.pdf", content_type="application/pdf"))

    assert resp.status_code == 200
    assert vision.calls[0][1]["mime_type"] == "image/jpeg"


def test_blank_image_reports_no_question(client, install_solver):
    vision = FakeGeminiClient("")
    text = FakeGeminiClient("문제를 찾을 수 없습니다")
    install_solver(vision, text)

    resp = client.post("/api/solve", files=_upload())

    assert resp.status_code == 200
    body = resp.json()
    assert body["extracted_text"] == ""
    assert body["solution"] == {
        "answer": "문제 없음",
        "explanation": "문제를 인식할 수 없어 풀이할 수 없습니다."
    }


def _request():
    return Request({"type": "http", "method": "POST", "path": "/api/solve", "headers": []})


def test_declared_size_over_limit_rejected_before_reading(install_solver):
    vision = FakeGeminiClient()
    install_solver(vision, FakeGeminiClient(), maxUploadBytes=4)
    upload = UploadFile(file=io.BytesIO(PNG_BYTES), size=len(PNG_BYTES), filename="big.png")

    resp = asyncio.run(server.solve_upload(_request(), upload))

    assert resp.status_code == 413
    assert upload.file.tell() == 0
    assert vision.calls == []


def test_unknown_size_reads_at_most_one_byte_past_limit(install_solver):
    vision = FakeGeminiClient()
    install_solver(vision, FakeGeminiClient(), maxUploadBytes=4)
    upload = UploadFile(file=io.BytesIO(PNG_BYTES), filename="big.png")

    resp = asyncio.run(server.solve_upload(_request(), upload))

    assert resp.status_code == 413
    assert upload.file.tell() == 5
    assert vision.calls == []
