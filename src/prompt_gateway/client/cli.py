from __future__ import annotations

import argparse
import asyncio
import logging

from prompt_gateway.client.controller import FormController
from prompt_gateway.config import get_settings


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Send one prompt to the completion gateway and print the reply.")
    parser.add_argument("prompt", help="Prompt text. An empty string is sent as-is.")
    parser.add_argument(
        "--url",
        default=settings.gateway_url,
        help="Gateway endpoint. Default: GATEWAY_URL or %(default)s",
    )
    parser.add_argument("--timeout", type=float, default=90.0, help="Seconds to wait for the gateway.")
    parser.add_argument("--verbose", action="store_true", help="Log request diagnostics to stderr.")
    return parser.parse_args(argv)


async def ask(controller: FormController, prompt: str) -> int:
    controller.update_prompt(prompt)
    result = await controller.submit()
    print(controller.display_text)
    if result is None or result.error is not None:
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    controller = FormController(args.url, timeout=args.timeout)
    return asyncio.run(ask(controller, args.prompt))


if __name__ == "__main__":
    raise SystemExit(main())
