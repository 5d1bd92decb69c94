"""Tests for model response parsing and validation."""
import json

import pytest

from etl.resume.exceptions import ParseFailure
from etl.resume.response_parser import (
    normalize_date,
    parse_legacy_bullets_response,
    parse_resume_response,
    parse_skill_list_response,
    split_response_lines,
    strip_code_fences,
    validate_resume_structure,
)


def _job(**overrides):
    job = {
        "company": "Acme",
        "title": "Engineer",
        "start_date": "2020-01-01",
        "bullet_points": [{"text": "Built a job scheduler in Python", "skills": ["Python"]}],
    }
    job.update(overrides)
    return job


class TestCodeFences:

    def test_fenced_and_bare_json_parse_identically(self):
        payload = {"jobs": [_job()], "skills": ["Python"]}
        bare = json.dumps(payload)
        fenced = f"```json\n{bare}\n```"

        assert parse_resume_response(fenced) == parse_resume_response(bare)

    def test_strip_without_newlines(self):
        assert strip_code_fences('```json{"a": 1}```') == '{"a": 1}'

    def test_plain_text_untouched(self):
        assert strip_code_fences("  hello  ") == "hello"


class TestParseResumeResponse:

    def test_unparseable_json(self):
        with pytest.raises(ParseFailure) as exc_info:
            parse_resume_response("Sorry, I cannot help with that.")

        assert exc_info.value.reason == ParseFailure.UNPARSEABLE
        assert str(exc_info.value) == "could not parse resume structure"

    @pytest.mark.parametrize("payload", [{}, {"jobs": "none"}, [1, 2], {"skills": []}])
    def test_missing_jobs_array(self, payload):
        with pytest.raises(ParseFailure) as exc_info:
            parse_resume_response(json.dumps(payload))

        assert exc_info.value.reason == ParseFailure.MISSING_JOBS
        assert str(exc_info.value) == "missing jobs array"

    def test_no_valid_jobs(self):
        payload = {"jobs": [{"company": "", "title": "Mgr"}, {"title": "Eng"}]}
        with pytest.raises(ParseFailure) as exc_info:
            parse_resume_response(json.dumps(payload))

        assert exc_info.value.reason == ParseFailure.NO_JOBS
        assert str(exc_info.value) == "no jobs found in resume"

    def test_empty_jobs_array(self):
        with pytest.raises(ParseFailure) as exc_info:
            parse_resume_response('{"jobs": []}')
        assert exc_info.value.reason == ParseFailure.NO_JOBS


class TestValidateResumeStructure:

    def test_jobs_missing_company_or_title_are_dropped(self):
        data = {"jobs": [{"company": "Acme", "title": "Eng"}, {"company": "", "title": "Mgr"}]}

        result = validate_resume_structure(data)

        assert len(result.resume.jobs) == 1
        assert result.resume.jobs[0].company == "Acme"
        assert result.resume.jobs[0].title == "Eng"
        assert len(result.rejected) == 1
        assert result.rejected[0].kind == "job"
        assert result.rejected[0].index == 1
        assert result.rejected[0].reason == "missing company"

    def test_nested_objects_are_not_stringified(self):
        jobs = [
            _job(company={"name": "Acme"}),
            _job(title=["Engineer"]),
            _job(bullet_points=[{"text": {"value": "Built a job scheduler"}}, "Shipped the billing service"]),
        ]

        result = validate_resume_structure({"jobs": jobs})

        assert len(result.resume.jobs) == 1
        assert [bp.text for bp in result.resume.jobs[0].bullet_points] == ["Shipped the billing service"]
        assert [(r.kind, r.reason) for r in result.rejected] == [
            ("job", "missing company"),
            ("job", "missing title"),
            ("bullet_point", "missing text"),
        ]

    def test_partial_success_keeps_valid_jobs(self):
        jobs = [_job(), _job(title=None), _job(company="Beta"), "garbage", _job(company="  ")]

        result = validate_resume_structure({"jobs": jobs})

        assert [j.company for j in result.resume.jobs] == ["Acme", "Beta"]
        assert [r.index for r in result.rejected] == [1, 3, 4]

    @pytest.mark.parametrize("city,state", [("Austin", "TX"), (None, "CA"), ("Remote", None)])
    def test_remote_jobs_have_no_location(self, city, state):
        result = validate_resume_structure({"jobs": [_job(is_remote=True, city=city, state=state)]})

        job = result.resume.jobs[0]
        assert job.is_remote is True
        assert job.city is None
        assert job.state is None

    def test_current_job_has_no_end_date(self):
        result = validate_resume_structure({"jobs": [_job(is_current=True, end_date="2023-05-01")]})

        job = result.resume.jobs[0]
        assert job.is_current is True
        assert job.end_date is None

    def test_optional_fields_default(self):
        result = validate_resume_structure({"jobs": [{"company": "Acme", "title": "Eng"}]})

        job = result.resume.jobs[0]
        assert job.city is None
        assert job.state is None
        assert job.end_date is None
        assert job.start_date is None
        assert job.is_remote is False
        assert job.is_current is False
        assert job.bullet_points == []
        assert result.resume.skills == []

    def test_non_remote_location_is_kept(self):
        result = validate_resume_structure({"jobs": [_job(city=" Austin ", state="TX")]})

        assert result.resume.jobs[0].city == "Austin"
        assert result.resume.jobs[0].state == "TX"

    def test_string_booleans(self):
        result = validate_resume_structure({"jobs": [_job(is_remote="true", is_current="no")]})

        assert result.resume.jobs[0].is_remote is True
        assert result.resume.jobs[0].is_current is False

    def test_bullet_filtering_and_skill_cap(self):
        bullets = [
            {"text": "Too short"},
            {"skills": ["Python"]},
            {"text": "Designed a distributed cache", "skills": ["a", "b", "c", "d", "e", "f", "g"]},
            "Plain string bullet about Kubernetes",
        ]

        result = validate_resume_structure({"jobs": [_job(bullet_points=bullets)]})

        kept = result.resume.jobs[0].bullet_points
        assert [bp.text for bp in kept] == [
            "Designed a distributed cache",
            "Plain string bullet about Kubernetes",
        ]
        assert kept[0].skills == ["a", "b", "c", "d", "e"]
        assert kept[1].skills == []
        reasons = [(r.kind, r.index, r.job_index, r.reason) for r in result.rejected]
        assert reasons == [
            ("bullet_point", 0, 0, "text too short"),
            ("bullet_point", 1, 0, "missing text"),
        ]

    def test_bullet_text_of_exactly_ten_chars_is_dropped(self):
        bullets = [{"text": "0123456789"}, {"text": "0123456789A"}]

        result = validate_resume_structure({"jobs": [_job(bullet_points=bullets)]})

        assert [bp.text for bp in result.resume.jobs[0].bullet_points] == ["0123456789A"]

    def test_top_level_skills_deduplicated_case_insensitively(self):
        data = {"jobs": [_job()], "skills": ["Python", " python ", "Docker", "", None, "DOCKER"]}

        result = validate_resume_structure(data)

        assert result.resume.skills == ["Python", "Docker"]
        assert result.resume.skill_set == {"python", "docker"}

    def test_non_list_skills_default_to_empty(self):
        result = validate_resume_structure({"jobs": [_job()], "skills": "Python, Docker"})
        assert result.resume.skills == []

    def test_job_order_is_preserved(self):
        data = {"jobs": [_job(title="Senior Engineer"), _job(title="Engineer")]}

        result = validate_resume_structure(data)

        assert [j.title for j in result.resume.jobs] == ["Senior Engineer", "Engineer"]


class TestNormalizeDate:

    @pytest.mark.parametrize("value,expected", [
        ("2020-03-15", "2020-03-15"),
        ("2020-03", "2020-03-01"),
        ("2020", "2020-01-01"),
        ("March 2021", "2021-03-01"),
        (2019, "2019-01-01"),
    ])
    def test_normalizes(self, value, expected):
        assert normalize_date(value) == expected

    @pytest.mark.parametrize("value", [None, "", "Present", "2020-13-01", "sometime"])
    def test_unreadable_is_none(self, value):
        assert normalize_date(value) is None


class TestLegacyResponses:

    def test_json_array_of_bullets(self):
        raw = '```json\n[{"text": "Built a scheduler service", "tags": ["Scheduling"]}, {"text": "short"}, 7]\n```'

        bullets, from_json = parse_legacy_bullets_response(raw)

        assert from_json is True
        assert len(bullets) == 1
        assert bullets[0].text == "Built a scheduler service"
        assert bullets[0].tags == ["Scheduling"]

    def test_non_json_falls_back_to_lines(self):
        raw = "Here are the bullets:\n{broken\n- Led a team of five engineers\nshort\n[1, 2"

        bullets, from_json = parse_legacy_bullets_response(raw)

        assert from_json is False
        assert [b.text for b in bullets] == ["Here are the bullets:", "- Led a team of five engineers"]
        assert all(b.tags == [] for b in bullets)

    def test_split_response_lines(self):
        assert split_response_lines("0123456789\n  0123456789A  \n{0123456789A") == ["0123456789A"]

    def test_skill_list_response(self):
        raw = "Python, Docker , K, , " + ", ".join(f"Skill{i}" for i in range(12)) + ", " + "x" * 30

        tags = parse_skill_list_response(raw)

        assert tags[:2] == ["Python", "Docker"]
        assert len(tags) == 10
        assert "K" not in tags
        assert "x" * 30 not in tags
