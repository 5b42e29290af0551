import pytest

from jobradar.filters import RegexClassifier, looks_like_hiring_post, rejection_reason, should_include


def test_fresher_golang_posting_included(config, make_record, now):
    assert should_include(make_record(posted_date="2025-01-20"), config, now) is True


@pytest.mark.parametrize("title", [
    "Python Developer Fresher",
    "Junior Java Engineer",
    "Going places: sales intern",
])
def test_missing_keyword_rejected(config, make_record, now, title):
    rec = make_record(title=title)
    assert should_include(rec, config, now) is False
    assert rejection_reason(rec, config, now) == "missing keyword"


@pytest.mark.parametrize("title", [
    "Senior Golang Engineer",
    "Golang Tech Lead",
    "Golang Engineering Manager",
    "Golang Developer (5 years)",
    "Golang Developer 5+ years",
    "Golang Developer, 2+ years",
    "Golang Developer with 10 years experience",
    "Lập trình viên Golang, yêu cầu 3 năm kinh nghiệm",
])
def test_seniority_rejected_even_with_keyword(config, make_record, now, title):
    assert should_include(make_record(title=title), config, now) is False


def test_experience_in_description_rejected(config, make_record, now):
    rec = make_record(title="Golang Developer", description="Need 3 yrs of Go")
    assert should_include(rec, config, now) is False


def test_go_developer_synonym_accepted(config, make_record, now):
    assert should_include(make_record(title="Junior Go Developer"), config, now) is True


def test_lead_inside_word_is_not_seniority(config, make_record, now):
    rec = make_record(title="Golang intern at a leading fintech")
    assert should_include(rec, config, now) is True


def test_zero_to_two_years_is_allowed(config, make_record, now):
    rec = make_record(title="Golang Fresher", description="0-2 years experience welcome")
    assert should_include(rec, config, now) is True


def test_stale_posting_rejected(config, make_record, now):
    rec = make_record(posted_date="2020-01-01")
    assert should_include(rec, config, now) is False
    assert rejection_reason(rec, config, now) == "stale posting"


def test_first_failing_check_wins(config, make_record, now):
    rec = make_record(title="Senior Golang Engineer", posted_date="2020-01-01")
    assert rejection_reason(rec, config, now) == "seniority excluded"


def test_missing_fields_do_not_raise(config, make_record, now):
    rec = make_record(title="Golang intern", description=None, posted_date=None)
    assert should_include(rec, config, now) is True


def test_regex_classifier_batch(config, make_record, now):
    records = [
        make_record(url="a"),
        make_record(url="b", title="Senior Golang Engineer"),
    ]
    assert RegexClassifier().classify(records, config, now) == [True, False]


@pytest.mark.parametrize("text,expected", [
    ("We're hiring a Golang intern!", True),
    ("#hiring golang backend intern", True),
    ("Công ty đang tuyển golang fresher", True),
    ("I'm looking for a golang job, any leads?", False),
    ("Golang is such a fun language", False),
])
def test_looks_like_hiring_post(text, expected):
    assert looks_like_hiring_post(text) is expected
