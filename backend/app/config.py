# -*- coding: utf-8 -*-
"""Environment driven settings for the evaluator service."""

import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LLM_PROVIDER = os.getenv("LLM_PROVIDER", "claude").strip().lower()
SUPPORTED_PROVIDERS = ("claude", "openai")

MODEL_OUTPUTS_MIN_CHARS = 50
MODEL_OUTPUTS_MAX_CHARS = int(os.getenv("MODEL_OUTPUTS_MAX_CHARS", "50000"))

CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", str(6 * 3600)))
