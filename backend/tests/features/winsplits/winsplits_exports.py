"""
Sample WinSplits exports shared by the winsplits tests.

Course: 2 controls + finish.

    Athlete  legs (s)         splits (s)        total
    Alice    60, 130, 180     60, 190, 370      6:10
    Bob      70, 125, 200     70, 195, 395      6:35
    Cecilia  90, 150, 240     90, 240, 480      8:00
    Dora     100, -, 245      100, -, -         mp

Best legs: 60, 125, 180. Best splits: 60, 190, 370.
"""

HEADER = "WinSplits Online\nPl\tName\tTime\tDiff\t1\t\t2\t\tFinish\t\t\t"


def row(*fields: str) -> str:
    """One exported line, with the trailing tab WinSplits writes."""
    return "\t".join(fields) + "\t"


RELATIVE_EXPORT = "\n".join([
    HEADER,
    row("1", "Alice", "6.10", "", "1.00", "(1)", "0.05", "(2)", "3.00", "(1)", "Alice"),
    row("", "OK Linne", "", "", "1.00", "(1)", "3.10", "(1)", "6.10", "(1)", "OK Linne"),
    row("2", "Bob", "6.35", "0.25", "0.10", "(2)", "2.05", "(1)", "0.20", "(2)", "Bob"),
    row("", "IFK Lidingo", "", "", "0.10", "(2)", "0.05", "(2)", "0.25", "(2)", "IFK Lidingo"),
    row("3", "Cecilia", "8.00", "1.50", "0.30", "(3)", "0.25", "(3)", "1.00", "(3)", "Cecilia"),
    row("", "Tumba", "", "", "0.30", "(3)", "0.50", "(3)", "1.50", "(3)", "Tumba"),
    row("", "Dora", "mp", "", "0.40", "(4)", "", "", "1.05", "(4)", "Dora"),
    row("", "Tumba", "", "", "0.40", "(4)", "", "", "", "", "Tumba"),
    "",
])

ACTUAL_EXPORT = "\n".join([
    HEADER,
    row("1", "Alice", "6.10", "", "1.00", "(1)", "2.10", "(2)", "3.00", "(1)", "Alice"),
    row("", "OK Linne", "", "", "1.00", "(1)", "3.10", "(1)", "6.10", "(1)", "OK Linne"),
    row("2", "Bob", "6.35", "0.25", "1.10", "(2)", "2.05", "(1)", "3.20", "(2)", "Bob"),
    row("", "IFK Lidingo", "", "", "1.10", "(2)", "3.15", "(2)", "6.35", "(2)", "IFK Lidingo"),
    row("3", "Cecilia", "8.00", "1.50", "1.30", "(3)", "2.30", "(3)", "4.00", "(3)", "Cecilia"),
    row("", "Tumba", "", "", "1.30", "(3)", "4.00", "(3)", "8.00", "(3)", "Tumba"),
    row("", "Dora", "mp", "", "1.40", "(4)", "", "", "4.05", "(4)", "Dora"),
    row("", "Tumba", "", "", "1.40", "(4)", "", "", "", "", "Tumba"),
    "",
])

# Two controls, one athlete, rows without the trailing tab
ALICE_ONLY_EXPORT = "\n".join([
    "Header line 1",
    "Header line 2",
    "1\tAlice\t5.00\t\t1.00\t(1)\t2.00\t(1)\t3.00\t(1)\tAlice",
    "\tClub1\t\t\t1.00\t(1)\t2.00\t(1)\t3.00\t(1)\tClub1",
])
