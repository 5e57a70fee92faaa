"""
Tests for the sketch solver CLI.
"""
import argparse
import asyncio

import httpx
import pytest
from PIL import Image

import cli_solve
from services.solver_client import SolverClient


class TestParseVariables:
    """Tests for parse_variables function."""

    def test_pairs(self):
        assert cli_solve.parse_variables(["x=3", " y = 4 "]) == {"x": "3", "y": "4"}

    def test_empty(self):
        assert cli_solve.parse_variables([]) == {}

    def test_missing_equals(self):
        with pytest.raises(argparse.ArgumentTypeError):
            cli_solve.parse_variables(["x"])


class TestSolveDrawing:
    """Tests for solve_drawing_cli coroutine."""

    @pytest.fixture
    def drawing_path(self, tmp_path):
        """White paper with two black dots at (10,10) and (50,40)."""
        img = Image.new('RGB', (100, 80), 'white')
        img.putpixel((10, 10), (0, 0, 0))
        img.putpixel((50, 40), (0, 0, 0))
        path = tmp_path / "drawing.png"
        img.save(path)
        return str(path)

    @pytest.fixture
    def mock_solver(self, monkeypatch):
        """Route the CLI's solver client to an in-process handler."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"data": [
                {"expr": "x", "result": "3", "assign": True},
                {"expr": "2+2", "result": "4", "assign": False},
            ]})

        def build(base_url, timeout):
            http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=base_url)
            return SolverClient(base_url=base_url, timeout=timeout, client=http)

        monkeypatch.setattr(cli_solve, "SolverClient", build)
        return requests

    def test_prints_results(self, drawing_path, mock_solver, tmp_path, capsys):
        """Test results, placement and variables are printed and rendered."""
        output = tmp_path / "board.png"

        code = asyncio.run(cli_solve.solve_drawing_cli(
            drawing_path, {"k": "1"}, "http://solver.test", 0.0, str(output)
        ))

        out = capsys.readouterr().out
        assert code == 0
        assert "2+2 = 4    @ (30.0, 25.0)" in out
        assert "x = 3" in out
        assert output.exists()
        assert len(mock_solver) == 1

    def test_missing_file(self, tmp_path, capsys):
        """Test a missing drawing is reported without calling the service."""
        code = asyncio.run(cli_solve.solve_drawing_cli(
            str(tmp_path / "nope.png"), {}, "http://solver.test", 0.0
        ))

        assert code == 1
        assert "File not found" in capsys.readouterr().out
