"""
Tests for the classifiers and the analysis service.
"""
import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
from hypothesis import given, strategies as st

from feedback_hub.domains import AIAnalysis, AnalysisResult, FeedbackItem, Insights
from feedback_hub.errors import ClassifierError
from feedback_hub.services.analysis import (
    AnalysisService,
    FEATURE_ACTIONS,
    GENERAL_ACTIONS,
    LocalClassifier,
    RemoteClassifier,
    TECHNICAL_ACTIONS,
)


@pytest.fixture
def local():
    return LocalClassifier()


def make_item(category, sentiment="neutral", keywords=None):
    return FeedbackItem(
        author_id="user-1",
        title="Some title",
        message="Some feedback message",
        category=category,
        sentiment=sentiment,
        ai_analysis=AIAnalysis(summary="s", keywords=keywords, confidence_score=0.6)
        if keywords is not None else None,
    )


def remote_result(**overrides):
    data = {
        "summary": "Remote summary",
        "keywords": ["a", "b", "c", "d", "e", "f", "g"],
        "suggested_actions": ["one", "two", "three", "four"],
        "confidence_score": 0.92,
        "sentiment": "positive",
    }
    data.update(overrides)
    return AnalysisResult(**data)


class TestLocalClassifier:
    def test_positive_sentiment(self, local):
        result = local.classify("This is great and amazing")

        assert result.sentiment == "positive"
        assert result.keywords == ["great", "amazing"]
        assert result.confidence_score == 0.6

    def test_negative_sentiment_with_technical_actions(self, local):
        result = local.classify("The app is broken and has a bug")

        assert result.sentiment == "negative"
        assert result.keywords == ["broken"]
        assert result.suggested_actions == TECHNICAL_ACTIONS

    @pytest.mark.parametrize(
        "message,sentiment",
        [
            ("This is great and wonderful", "positive"),
            ("This is broken and terrible", "negative"),
            ("good but bad", "neutral"),
            ("The sky is blue today", "neutral"),
        ],
    )
    def test_sentiment_rule(self, local, message, sentiment):
        assert local.classify(message).sentiment == sentiment

    def test_tabs_and_newlines_separate_words(self, local):
        result = local.classify("works\nbroken  today\tgreat")

        assert result.keywords == ["works", "broken", "today", "great"]
        assert result.sentiment == "neutral"
        assert local.classify("works\nbroken  today").sentiment == "negative"

    def test_empty_message(self, local):
        result = local.classify("")

        assert result.sentiment == "neutral"
        assert result.keywords == []
        assert result.summary == ""
        assert result.suggested_actions == GENERAL_ACTIONS

    def test_long_message_is_truncated(self, local):
        result = local.classify("a" * 81)

        assert result.summary == "a" * 77 + "..."
        assert len(result.summary) == 80

    def test_eighty_characters_are_kept(self, local):
        assert local.classify("b" * 80).summary == "b" * 80

    def test_feature_actions(self, local):
        result = local.classify("Please consider this feature request")

        assert result.keywords == ["please", "consider", "feature", "request"]
        assert result.suggested_actions == FEATURE_ACTIONS

    def test_keywords_are_capped_and_ordered(self, local):
        result = local.classify("alpha bravo charlie delta echo foxtrot golf")

        assert result.keywords == ["alpha", "bravo", "charlie", "delta", "echo"]

    def test_stopwords_and_short_words_are_skipped(self, local):
        result = local.classify("These were those cats with hats")

        assert result.keywords == ["cats", "hats"]

    def test_mobile_login_report(self, local):
        result = local.classify("Login page is broken on mobile, please fix")

        assert result.sentiment == "negative"
        assert result.keywords == ["login", "page", "broken", "mobile,", "please"]
        assert result.suggested_actions == TECHNICAL_ACTIONS
        assert result.summary == "Login page is broken on mobile, please fix"

    @given(st.text(max_size=300))
    def test_classification_is_deterministic(self, message):
        classifier = LocalClassifier()

        first = classifier.classify(message)
        second = classifier.classify(message)

        assert first == second
        assert len(first.keywords) <= 5
        assert len(first.summary) <= 80
        assert first.sentiment in ("positive", "neutral", "negative")


class TestLocalSummary:
    def test_counts_and_recommendations(self, local):
        items = [
            make_item("bug", "negative", ["crash", "save"]),
            make_item("bug", "negative", ["crash"]),
            make_item("feature", "positive", ["export"]),
        ]

        insights = local.summarize(items)

        assert insights.total_analyzed == 3
        assert insights.summary == (
            "Analyzed 3 feedback submissions. Primary focus areas: "
            "bug improvements and user experience enhancement."
        )
        assert insights.trends == [
            "bug feedback represents 67% of submissions",
            "1 positive vs 2 negative responses",
            "Common themes: crash, save, export",
        ]
        assert insights.recommendations == [
            "Prioritize bug fixes to improve user experience",
            "Evaluate popular feature requests for roadmap inclusion",
            "Focus on addressing user pain points",
        ]

    def test_tied_categories_go_to_the_later_one(self, local):
        insights = local.summarize([make_item("feature"), make_item("bug")])

        assert insights.trends[0] == "bug feedback represents 50% of submissions"

    def test_percentage_rounds_half_up(self, local):
        items = [make_item("bug")] * 5 + [make_item("improvement")] * 3

        insights = local.summarize(items)

        assert insights.trends[0] == "bug feedback represents 63% of submissions"

    def test_without_keywords_or_problems(self, local):
        insights = local.summarize([make_item("general", "positive")])

        assert insights.trends[2] == "Diverse feedback topics"
        assert insights.recommendations == [
            "Continue monitoring for technical issues",
            "Gather more feature feedback",
            "Maintain current positive user experience",
        ]


class TestRemoteClassifier:
    @pytest.mark.asyncio
    async def test_classify_trims_lists(self):
        provider = Mock()
        provider.parse_structured_output = AsyncMock(return_value=remote_result())
        classifier = RemoteClassifier(provider, model="gpt-4.1-mini", timeout=1.0)

        result = await classifier.classify("Love the new dashboard")

        assert result.keywords == ["a", "b", "c", "d", "e"]
        assert result.suggested_actions == ["one", "two", "three"]
        kwargs = provider.parse_structured_output.call_args.kwargs
        assert kwargs["model_class"] is AnalysisResult
        assert kwargs["model"] == "gpt-4.1-mini"
        assert "Love the new dashboard" in kwargs["prompt"]

    @pytest.mark.asyncio
    async def test_timeout_raises_classifier_error(self):
        async def slow(**kwargs):
            await asyncio.sleep(1)

        provider = Mock()
        provider.parse_structured_output = AsyncMock(side_effect=slow)
        classifier = RemoteClassifier(provider, timeout=0.01)

        with pytest.raises(ClassifierError):
            await classifier.classify("Anything at all")

    @pytest.mark.asyncio
    async def test_transport_failure_raises_classifier_error(self):
        provider = Mock()
        provider.parse_structured_output = AsyncMock(side_effect=ValueError("bad json"))
        classifier = RemoteClassifier(provider)

        with pytest.raises(ClassifierError):
            await classifier.summarize([make_item("bug")])

    @pytest.mark.asyncio
    async def test_summarize_sends_category_lines(self):
        insights = Insights(summary="s", trends=[], recommendations=[], total_analyzed=1)
        provider = Mock()
        provider.parse_structured_output = AsyncMock(return_value=insights)
        classifier = RemoteClassifier(provider)

        assert await classifier.summarize([make_item("bug")]) == insights
        prompt = provider.parse_structured_output.call_args.kwargs["prompt"]
        assert "bug: Some feedback message" in prompt


class TestAnalysisService:
    def test_remote_strategy_requires_remote_classifier(self):
        with pytest.raises(ValueError):
            AnalysisService(strategy="remote")

    @pytest.mark.asyncio
    async def test_local_strategy(self):
        service = AnalysisService(strategy="local")

        result = await service.classify("This is great and amazing")

        assert service.ai_enabled is False
        assert result.confidence_score == 0.6

    @pytest.mark.asyncio
    async def test_remote_strategy(self):
        remote = Mock()
        remote.classify = AsyncMock(return_value=remote_result())
        service = AnalysisService(strategy="remote", remote_classifier=remote)

        result = await service.classify("Anything")

        assert result.confidence_score == 0.92

    @pytest.mark.asyncio
    async def test_remote_failure_falls_back_to_local(self):
        remote = Mock()
        remote.classify = AsyncMock(side_effect=ClassifierError("timed out"))
        remote.summarize = AsyncMock(side_effect=ClassifierError("timed out"))
        service = AnalysisService(strategy="remote", remote_classifier=remote)

        result = await service.classify("The app is broken")
        insights = await service.summarize([make_item("bug")])

        assert result.sentiment == "negative"
        assert result.confidence_score == 0.6
        assert insights.total_analyzed == 1

    def test_describe(self):
        remote = Mock()
        remote.name = "OpenAI structured analysis"

        local_status = AnalysisService(strategy="local").describe()
        remote_status = AnalysisService(strategy="remote", remote_classifier=remote).describe()

        assert local_status.ai_enabled is False
        assert local_status.service == "Local keyword classifier"
        assert remote_status.ai_enabled is True
        assert remote_status.service == "OpenAI structured analysis"
        assert "Sentiment analysis" in remote_status.capabilities
