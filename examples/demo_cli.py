from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
import tempfile

from palm_api import PaLM
from palm_api.env import load_env
from palm_api.fake import FakeTransport
from palm_api.presets import PresetLoader
from palm_api.storage import TranscriptStore


ROOT = Path(__file__).resolve().parents[1]


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG if os.getenv("PALM_DEBUG") else logging.INFO)

    # Uses the real API when PALM_API_KEY is set, the fake transport otherwise.
    load_env()
    if os.getenv("PALM_API_KEY") or os.getenv("GOOGLE_API_KEY"):
        client = PaLM.from_env()
    else:
        client = PaLM("demo-key", transport=FakeTransport())

    async with client:
        print("Text:", await client.generate_text("Write a haiku about embeddings."))
        print("Ask:", await client.ask("What is a transformer?", temperature=0.2))
        print("Embedding:", (await client.embed("hello world"))[:3])

        preset = PresetLoader(ROOT / "presets").load("tutor")
        chat = client.create_chat(**preset.to_options())
        print("Chat 1:", await chat.ask("What is a vector?"))
        print("Chat 2:", await chat.ask("And a matrix?"))

        with tempfile.TemporaryDirectory() as tmp:
            store = TranscriptStore(Path(tmp))
            path = store.save("demo", chat.export())
            print("Saved transcript:", path.name, "messages:", len(chat))

            resumed = client.create_chat(messages=store.load("demo") or [], **preset.to_options())
            print("Resumed chat:", await resumed.ask("Summarize what we covered."))


if __name__ == "__main__":
    asyncio.run(main())
