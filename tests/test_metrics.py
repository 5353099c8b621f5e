# tests/test_metrics.py
import matplotlib
matplotlib.use("Agg")

import os_simulator as sim


def _finished_kernel(make_kernel):
    kernel = make_kernel(quantum=2)
    kernel.create_process(["print x"] * 3, 0)
    kernel.create_process(["print x"] * 2, 1)
    kernel.run()
    return kernel


def test_process_metrics(make_kernel):
    kernel = _finished_kernel(make_kernel)
    rows = {p['pid']: p for p in kernel.metrics.completed_processes}
    # P1 is requeued before P2 is promoted: P1 runs 0-2 and 2-3, P2 runs 3-5
    assert rows[1] == {'pid': 1, 'release': 0, 'start': 0, 'end': 3, 'burst': 3,
                       'turnaround': 3, 'waiting': 0, 'response': 0}
    assert rows[2] == {'pid': 2, 'release': 1, 'start': 3, 'end': 5, 'burst': 2,
                       'turnaround': 4, 'waiting': 2, 'response': 2}
    assert kernel.metrics.context_switches == 3
    assert kernel.metrics.cpu_utilization() == 100.0


def test_report_and_exports(make_kernel, tmp_path, capsys):
    kernel = _finished_kernel(make_kernel)
    png = tmp_path / "gantt.png"
    csv = tmp_path / "results.csv"
    kernel.shutdown(gantt_file=str(png), csv_file=str(csv))

    out = capsys.readouterr().out
    assert "METRICS REPORT" in out
    assert "Total Context Switches: 3" in out
    assert png.exists() and png.stat().st_size > 0
    lines = csv.read_text().splitlines()
    assert lines[0] == "PID,Release,Start,End,Burst,Turnaround,Waiting,Response"
    assert lines[1:] == ["1,0,0,3,3,3,0,0", "2,1,3,5,2,4,2,2"]


def test_gantt_skips_empty_slices():
    metrics = sim.SimMetrics()
    metrics.log_gantt(1, 3, 3)
    assert metrics.gantt_data == []
    assert metrics.export_gantt_chart("unused.png") is None
