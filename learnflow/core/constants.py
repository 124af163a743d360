# -*- coding: utf-8 -*-
"""プラットフォーム共通の定数と列挙型.

サービス間で共有される状態値・難易度・ロールなどを定義する。
"""

from __future__ import annotations

from enum import Enum


# セッションCookie名
AUTH_TOKEN_KEY = "token"
AUTH_REFRESH_TOKEN_KEY = "refresh_token"
NO_TOKEN_FOUND = "NO_TOKEN_FOUND"

# ガイドエディタ
DEFAULT_PAGE_CONTENT = "# New page\n\nStart writing your content here..."
DEFAULT_MAX_ATTEMPTS_BEFORE_GUIDES = 3

# ランキング
LEADERBOARD_DEFAULT_LIMIT = 50

# 入力制限
CHALLENGE_NAME_MAX_LENGTH = 100
CHALLENGE_MAX_EXPERIENCE_POINTS = 10000
CHALLENGE_MAX_ATTEMPTS_LIMIT = 100
INITIAL_CODE_MAX_LENGTH = 10000


class UserRole(str, Enum):
    """ユーザーロール."""

    ADMIN = "ROLE_ADMIN"
    STUDENT = "ROLE_STUDENT"
    TEACHER = "ROLE_TEACHER"


class GuideStatus(str, Enum):
    """ガイド公開状態."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"
    ASSOCIATED_WITH_COURSE = "ASSOCIATED_WITH_COURSE"


class CourseDifficulty(str, Enum):
    """コース難易度."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


class ChallengeDifficulty(str, Enum):
    """チャレンジ難易度."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"
    EXPERT = "EXPERT"


class ChallengeStatus(str, Enum):
    """チャレンジ公開状態."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class ProgrammingLanguage(str, Enum):
    """コードバージョンの言語."""

    JAVASCRIPT = "JAVASCRIPT"
    PYTHON = "PYTHON"
    JAVA = "JAVA"
    C_PLUS_PLUS = "C_PLUS_PLUS"


class ReactionType(str, Enum):
    """投稿リアクション種別."""

    LIKE = "like"
    LOVE = "love"
    HAHA = "haha"
    WOW = "wow"


class CompetitiveRank(str, Enum):
    """競技ランク（低い順）."""

    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"
    GRANDMASTER = "GRANDMASTER"


# 難易度ごとの獲得可能XP上限
CHALLENGE_DIFFICULTY_MAX_XP: dict[ChallengeDifficulty, int] = {
    ChallengeDifficulty.EASY: 5,
    ChallengeDifficulty.MEDIUM: 10,
    ChallengeDifficulty.HARD: 20,
    ChallengeDifficulty.EXPERT: 40,
}

_LANGUAGE_DISPLAY_NAMES = {
    ProgrammingLanguage.JAVASCRIPT.value: "JavaScript",
    ProgrammingLanguage.PYTHON.value: "Python",
    ProgrammingLanguage.JAVA.value: "Java",
    ProgrammingLanguage.C_PLUS_PLUS.value: "C++",
}


def language_display_name(language: str) -> str:
    """言語コードを表示名に変換.

    未知の言語は先頭のみ大文字にする。

    Args:
        language: 言語コード（例: "C_PLUS_PLUS"）

    Returns:
        表示名（例: "C++"）
    """
    if not language:
        return ""
    if language in _LANGUAGE_DISPLAY_NAMES:
        return _LANGUAGE_DISPLAY_NAMES[language]
    return language[0].upper() + language[1:].lower()


def max_xp_for_difficulty(difficulty: str | None) -> int | None:
    """難易度から最大XPを取得.

    Args:
        difficulty: 難易度文字列

    Returns:
        最大XP（難易度未設定・不明の場合はNone）
    """
    if not difficulty:
        return None
    try:
        return CHALLENGE_DIFFICULTY_MAX_XP[ChallengeDifficulty(difficulty.upper())]
    except ValueError:
        return None
