from typing import Protocol


class AIClient(Protocol):
    model: str

    async def generate(self, prompt: str, *, web_search: bool = True) -> str: ...
