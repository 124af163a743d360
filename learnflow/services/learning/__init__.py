"""Learningサービス（トピック・ガイド・コース）."""
