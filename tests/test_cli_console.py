import cli


def test_console_com_vs_com_runs_to_game_over(capsys):
    w = cli.main(black="COM", white="COM", policy="greedy", seed=1)
    out = capsys.readouterr().out
    assert "=== Game Over ===" in out
    assert "PUT: B" in out
    assert w in ("B", "W", None)
