#!/usr/bin/env python3
"""
Chat demo for zai-client.

Runs a one-shot completion and then streams a second one.

Usage:
    ZAI_API_KEY=... uv run python scripts/chat_demo.py
    uv run python scripts/chat_demo.py --zhipu --model glm-4.7 "Tell me a joke"
"""

import argparse
import asyncio
import sys

from loguru import logger

from zai_client import (
    ChatCompletionRequest,
    Message,
    ZaiClient,
    ZaiError,
    ZhipuAiClient,
)
from zai_client.config import Settings
from zai_client.logging import setup_logging


async def run(args: argparse.Namespace) -> int:
    client_cls = ZhipuAiClient if args.zhipu else ZaiClient

    async with client_cls() as client:
        request = ChatCompletionRequest(
            model=args.model,
            messages=[
                Message.system("You are a helpful assistant."),
                Message.user(args.prompt),
            ],
            temperature=args.temperature,
        )

        try:
            completion = await client.chat.create(request)
            print(completion.summary())

            print("Streaming:")
            async with await client.chat.create_stream(request) as stream:
                async for chunk in stream:
                    if chunk.choices and chunk.choices[0].delta.content:
                        print(chunk.choices[0].delta.content, end="", flush=True)
            print()
        except ZaiError as e:
            logger.error(f"[{e.debug_id}] {e.kind.value}: {e}")
            return 1

    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="zai-client chat demo")
    parser.add_argument("prompt", nargs="?", default="Hello, please introduce yourself.")
    parser.add_argument("--model", default="glm-4.7")
    parser.add_argument("--temperature", type=float, default=0.7)
    parser.add_argument("--zhipu", action="store_true", help="Use the mainland China endpoint")
    args = parser.parse_args()

    settings = Settings()
    setup_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
    try:
        return asyncio.run(run(args))
    except ZaiError as e:
        # Raised at construction (e.g. missing API key)
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
