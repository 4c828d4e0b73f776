from songimport.groups import heading_label, split_lyric_groups
from songimport.models import LyricGroup


def test_heading_label():
    assert heading_label("[Verse 1]") == "Verse 1"
    assert heading_label("(Chorus)") == "Chorus"
    assert heading_label("[Chorus:]") == "Chorus"
    assert heading_label("  V2 ") == "V2"


def test_split_labelled_groups():
    groups = split_lyric_groups("[Verse 1]\nLine A\nLine B\n\n[Chorus]\nLine C")
    assert groups == [
        LyricGroup(label="Verse 1", lines=["Line A", "Line B"]),
        LyricGroup(label="Chorus", lines=["Line C"]),
    ]


def test_split_bare_headings():
    groups = split_lyric_groups("Verse 1\nla\n\n(Bridge)\nlo")
    assert [g.label for g in groups] == ["Verse 1", "Bridge"]


def test_split_unlabelled_groups():
    groups = split_lyric_groups("line a\n  line b  \n\n\nline c")
    assert groups == [
        LyricGroup(label=None, lines=["line a", "line b"]),
        LyricGroup(label=None, lines=["line c"]),
    ]


def test_split_heading_only_group():
    assert split_lyric_groups("Instrumental") == [LyricGroup(label="Instrumental", lines=[])]


def test_split_empty():
    assert split_lyric_groups("") == []
    assert split_lyric_groups("\n \n") == []
