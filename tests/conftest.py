"""
Pytest fixtures for the exam problem solver tests.

The Gemini client is replaced by a scripted fake so no network calls are made.
"""
import pytest
from fastapi.testclient import TestClient

from agents.extractor_agent import ExtractorAgent
from agents.parser_agent import ParserAgent
from agents.problem_solver import ProblemSolver
from agents.solver_agent import SolverAgent
from api import server
from models.schemas import SystemConfig
from workers.solve_processor import SolveProcessor


class FakeGeminiClient:
    """Returns scripted responses in order; exceptions in the script are raised."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def generate_response(self, contents, allow_empty=False):
        self.calls.append(contents)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_solver(vision_client, text_client) -> ProblemSolver:
    return ProblemSolver(
        extractor_agent=ExtractorAgent(vision_client),
        parser_agent=ParserAgent(text_client),
        solver_agent=SolverAgent(text_client)
    )


@pytest.fixture
def install_solver(monkeypatch):
    """Install a solver built on fake clients into the server globals."""
    def _install(vision_client, text_client, **config_overrides):
        processor = SolveProcessor(make_solver(vision_client, text_client), max_concurrent_workers=2)
        config = SystemConfig(googleApiKey="test-key", **config_overrides)
        monkeypatch.setattr(server, "solve_processor", processor)
        monkeypatch.setattr(server, "system_config", config)
        return processor
    return _install


@pytest.fixture
def client():
    """HTTP client for the app; lifespan is not run so no real clients are built."""
    return TestClient(server.app)
