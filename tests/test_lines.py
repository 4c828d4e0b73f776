import pytest

from songimport.lines import (
    LineType,
    classify_line,
    extract_artist,
    extract_ccli,
    extract_default_key,
    extract_link,
    extract_title_line,
    is_heading,
    is_metadata_line,
    trim_line,
)

# ---------------------------------------------------------------------------
# is_heading
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "line",
    [
        "Verse",
        "Verse 1",
        "verse 12",
        "V2",
        "v 3",
        "Chorus",
        "C",
        "(Chorus)",
        "(Bridge 2)",
        "Pre-Chorus",
        "prechorus",
        "PC",
        "Outro",
        "Ending",
        "Intro",
        "Opening",
        "Tag",
        "Coda",
        "Interlude",
        "Instrumental",
        "  Bridge  ",
    ],
)
def test_canonical_headings(line):
    assert is_heading(line)


def test_heading_after_stray_bom():
    assert is_heading("\ufeffChorus")
    assert is_heading("\ufeff[Verse 1]\ufeff")


def test_heading_number_must_be_ascii():
    assert not is_heading("Verse \u0661")


def test_bracket_headings():
    assert is_heading("[Verse 1]")
    assert is_heading("[Spontaneous worship]")
    assert is_heading("  [Chorus]  ")


@pytest.mark.parametrize(
    "line",
    ["", "   ", "[]", "Chorus:", "Verse one", "Victory in Jesus", "Amazing grace", "[Chorus] la la"],
)
def test_not_headings(line):
    assert not is_heading(line)


# ---------------------------------------------------------------------------
# extract_title_line
# ---------------------------------------------------------------------------


def test_title_field():
    assert extract_title_line("Title: Amazing Grace") == "Amazing Grace"
    assert extract_title_line("  title -  Amazing Grace  ") == "Amazing Grace"


def test_title_field_alternate_names():
    assert extract_title_line("Song Title: How Great Thou Art") == "How Great Thou Art"
    assert extract_title_line("song name - Oceans") == "Oceans"


def test_title_field_requires_value():
    assert extract_title_line("Title:") is None
    assert extract_title_line("Title:    ") is None


def test_title_field_must_start_line():
    assert extract_title_line("Subtitle: Live") is None
    assert extract_title_line("The title is here") is None


# ---------------------------------------------------------------------------
# extract_ccli
# ---------------------------------------------------------------------------


def test_ccli_variants():
    assert extract_ccli("CCLI #1234567") == "1234567"
    assert extract_ccli("CCLI ID: 7654321") == "7654321"
    assert extract_ccli("ccli-4348399") == "4348399"
    assert extract_ccli("© 2004 worshiptogether.com CCLI 4348399") == "4348399"


def test_ccli_needs_four_digits():
    assert extract_ccli("CCLI #123") is None
    assert extract_ccli("CCLI Song Number") is None


def test_ccli_digits_must_be_ascii():
    assert extract_ccli("CCLI #\u0661\u0662\u0663\u0664\u0665") is None


# ---------------------------------------------------------------------------
# extract_default_key
# ---------------------------------------------------------------------------


def test_key_simple():
    assert extract_default_key("Key: G") == "G"
    assert extract_default_key("Key - Ebm") == "Ebm"
    assert extract_default_key("Original Key: A") == "A"


def test_key_with_slash_alternate():
    assert extract_default_key("Key: D/E") == "D/E"
    assert extract_default_key("Key: C# / Db") == "C# / Db"


def test_key_requires_whole_word():
    assert extract_default_key("Keyboard: Bb") is None
    assert extract_default_key("no key here") is None


# ---------------------------------------------------------------------------
# extract_artist
# ---------------------------------------------------------------------------


def test_artist_field():
    assert extract_artist("Artist: Jane Doe") == "Jane Doe"
    assert extract_artist("artist - Jane Doe") == "Jane Doe"


def test_artist_credit_lines():
    assert extract_artist("Words and Music by Chris Tomlin, Ed Cash") == "Chris Tomlin, Ed Cash"
    assert extract_artist("Music by: Jane Doe") == "Jane Doe"
    assert extract_artist("Lyrics by John Newton") == "John Newton"
    assert extract_artist("Written by Jane Doe") == "Jane Doe"


def test_artist_cut_at_ccli():
    assert extract_artist("Artist: Jane Doe CCLI #1234567") == "Jane Doe"


def test_artist_cut_at_dash_separator():
    assert extract_artist("Written by John Newton - 1779") == "John Newton"
    # A hyphen inside a name is not a separator
    assert extract_artist("Artist: Jean-Luc Picard") == "Jean-Luc Picard"


def test_artist_from_key_line():
    assert extract_artist("Key: G - Artist: Jane Doe") == "Jane Doe"


def test_artist_absent():
    assert extract_artist("Amazing grace how sweet the sound") is None
    assert extract_artist("Artist: CCLI 1234567") is None


# ---------------------------------------------------------------------------
# extract_link
# ---------------------------------------------------------------------------


def test_link_plain():
    assert extract_link("https://example.com/song") == "https://example.com/song"


def test_link_trailing_punctuation_stripped():
    assert extract_link("(see https://example.com/song).") == "https://example.com/song"
    assert extract_link("http://example.com/a;,") == "http://example.com/a"


def test_link_first_only():
    assert extract_link("https://a.example https://b.example") == "https://a.example"


def test_link_absent():
    assert extract_link("www.example.com") is None


# ---------------------------------------------------------------------------
# is_metadata_line
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "line",
    [
        "CCLI #1234567",
        "Key: G",
        "Artist: Jane Doe",
        "Author",
        "Written by Jane",
        "Words by Jane",
        "Words and Music by Jane",
        "Music by Jane",
        "Lyrics by Jane",
    ],
)
def test_metadata_lines(line):
    assert is_metadata_line(line)


def test_plain_lines_are_not_metadata():
    assert not is_metadata_line("Amazing grace how sweet the sound")
    assert not is_metadata_line("Artistry of the heavens")


# ---------------------------------------------------------------------------
# classify_line
# ---------------------------------------------------------------------------


def test_classify_line():
    assert classify_line("") == LineType.BLANK
    assert classify_line("  ") == LineType.BLANK
    assert classify_line("[Chorus]") == LineType.HEADING
    assert classify_line("Verse 2") == LineType.HEADING
    assert classify_line("Title: Oceans") == LineType.TITLE
    assert classify_line("CCLI #1234567") == LineType.METADATA
    assert classify_line("Words and Music by Jane") == LineType.METADATA
    assert classify_line("https://example.com") == LineType.LINK
    assert classify_line("Amazing grace") == LineType.CONTENT


def test_classify_line_after_stray_bom():
    assert classify_line("\ufeff") == LineType.BLANK
    assert classify_line("\ufeffKey: G") == LineType.METADATA


# ---------------------------------------------------------------------------
# trim_line
# ---------------------------------------------------------------------------


def test_trim_line():
    assert trim_line("  la \t") == "la"
    assert trim_line("\ufeff la\ufeff ") == "la"
    assert trim_line("a\ufeffb") == "a\ufeffb"
