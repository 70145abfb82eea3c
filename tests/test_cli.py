import json

import pytest

import venn_layout.__main__ as cli


def _write_areas(tmp_path, areas):
    path = tmp_path / "areas.json"
    path.write_text(json.dumps(areas), encoding="utf-8")
    return path


def test_main_writes_solution(tmp_path):
    areas_path = _write_areas(
        tmp_path,
        [
            {"sets": ["A"], "size": 12},
            {"sets": ["B"], "size": 12},
            {"sets": ["A", "B"], "size": 2},
        ],
    )
    output_path = tmp_path / "diagram.json"

    cli.main([str(areas_path), "--seed", "4", "--layout", "greedy", "--output", str(output_path)])

    document = json.loads(output_path.read_text(encoding="utf-8"))
    assert [c["set_id"] for c in document["circles"]] == ["A", "B"]
    assert [i["set_id"] for i in document["intersections"]] == ["A_B"]
    assert document["intersections"][0]["sets"] == ["A", "B"]


def test_main_prints_to_stdout(tmp_path, capsys):
    areas_path = _write_areas(tmp_path, [{"sets": ["A"], "size": 3}])

    cli.main([str(areas_path), "--width", "50", "--height", "50", "--padding", "0"])

    document = json.loads(capsys.readouterr().out)
    assert document["intersections"] == []
    assert document["circles"][0]["x"] == pytest.approx(25, abs=1e-6)


def test_main_rejects_invalid_areas(tmp_path):
    areas_path = _write_areas(tmp_path, [{"sets": ["A"], "size": -1}])

    with pytest.raises(SystemExit) as exc:
        cli.main([str(areas_path)])

    assert exc.value.code == 1
