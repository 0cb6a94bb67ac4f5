"""Unit tests for content models and derived values."""

from datetime import date

import pytest

from podsite.content.models import (
    BlogPost,
    EpisodeUpdate,
    Experience,
    calculate_experience,
    estimate_read_time,
    sort_by_publish_date,
)


class TestReadTime:
    """Reading time estimate."""

    @pytest.mark.parametrize(
        "words,expected",
        [
            (0, "1 min read"),
            (1, "1 min read"),
            (200, "1 min read"),
            (201, "2 min read"),
            (400, "2 min read"),
            (1000, "5 min read"),
        ],
    )
    def test_rounds_up_per_200_words(self, words, expected):
        assert estimate_read_time("word " * words) == expected

    def test_counts_whitespace_separated_words(self):
        assert estimate_read_time("one\ntwo\t three") == "1 min read"


class TestExperience:
    """Years of experience from the profile start date."""

    def test_years_and_months(self):
        result = calculate_experience("2021-01", today=date(2024, 5, 17))
        assert result == Experience(years=3, months=4)
        assert result.label == "3.4"

    def test_same_month_is_zero(self):
        assert calculate_experience("2024-05", today=date(2024, 5, 1)) == Experience(0, 0)

    @pytest.mark.parametrize("value", [None, "", "soon", "2024", "2024-13", "2030-01"])
    def test_unusable_dates_yield_zero(self, value):
        assert calculate_experience(value, today=date(2024, 5, 1)) == Experience(0, 0)


class TestCamelModel:
    """camelCase records and partial updates."""

    def test_record_uses_camel_case_keys(self):
        post = BlogPost(id="blog_1", title="T", read_time="2 min read", publish_date="2024-05-01")
        record = post.to_record()

        assert record["readTime"] == "2 min read"
        assert record["publishDate"] == "2024-05-01"
        assert "thumbnail" not in record

    def test_accepts_camel_case_input(self):
        update = EpisodeUpdate.model_validate({"youtubeUrl": "https://youtu.be/x"})
        assert update.youtube_url == "https://youtu.be/x"

    def test_changes_only_include_sent_fields(self):
        update = EpisodeUpdate.model_validate({"title": "New", "bogus": 1})
        assert update.changes() == {"title": "New"}

    def test_changes_keep_explicit_nulls(self):
        update = EpisodeUpdate.model_validate({"youtubeUrl": None})
        assert update.changes() == {"youtubeUrl": None}


class TestSortByPublishDate:
    def test_newest_first(self):
        posts = [
            BlogPost(id="blog_a", title="A", publish_date="2024-01-05"),
            BlogPost(id="blog_b", title="B", publish_date="2024-03-01"),
            BlogPost(id="blog_c", title="C"),
        ]
        assert [p.id for p in sort_by_publish_date(posts)] == ["blog_b", "blog_a", "blog_c"]
