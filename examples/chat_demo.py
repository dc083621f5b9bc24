"""Minimal console demonstration of the chat session controller."""

import asyncio
import sys

from chat_core.api.service import create_session, widget_view


async def main(config_code: str) -> None:
    controller = create_session(config_code)
    task = controller.bootstrap()
    if task is not None:
        await task
    shown = 0
    try:
        while True:
            view = widget_view(controller)
            for turn in view.turns[shown:]:
                print(f"{turn.speaker}: {turn.html}")
            shown = len(view.turns)
            if view.error_text:
                print("Error:", view.error_text)
                controller.dismiss_error()
            for idx, f in enumerate(view.followups, 1):
                print(f"  [{idx}] {f}")
            text = (await asyncio.to_thread(input, "> ")).strip()
            if not text:
                break
            if text.isdigit() and 0 < int(text) <= len(view.followups):
                await controller.select_followup(view.followups[int(text) - 1])
            else:
                await controller.send(text)
    finally:
        controller.close()


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "DEFAULT"))
