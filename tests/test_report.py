from runt.core.errors import ExitStatusError
from runt.core.models import ChildOutcome
from runt.core.report import render_summary


def test_summary_lists_every_outcome():
    text = render_summary([
        ChildOutcome(executable="blah/f"),
        ChildOutcome(executable="blah/e", error=ExitStatusError(2, "blah/e")),
    ])
    assert "1/2 ok, 1 failed" in text
    assert "blah/e" in text and "blah/f" in text
    assert "exit status 2" in text
    assert text.index("blah/e") < text.index("blah/f")


def test_summary_of_empty_batch():
    assert "0/0 ok, 0 failed" in render_summary([])
