"""
Bot 진입점

실행 방법:
    python -m bot
"""

import asyncio

from bot.bootstrap import main


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
