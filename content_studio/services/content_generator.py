"""
Content generation behind a fixed interface.
TemplateContentGenerator fills static templates; an LLM-backed generator can
replace it through the get_content_generator dependency.
"""
from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import quote

DEFAULT_SCRIPT_LENGTH = 1000


class ContentGenerator(ABC):
    @abstractmethod
    def generate_script(
        self,
        topic: str,
        keywords: Optional[str] = None,
        tone: Optional[str] = None,
        length: Optional[int] = None,
        max_length: Optional[int] = None,
    ) -> str:
        ...

    @abstractmethod
    def generate_title(self, topic: str, keywords: Optional[str] = None) -> str:
        ...

    @abstractmethod
    def generate_image(self, prompt: str, style: Optional[str] = None) -> str:
        """Return the URL of the generated image."""

    @abstractmethod
    def generate_audio(self, text: str, voice: Optional[str] = None) -> str:
        """Return the URL of the generated audio."""


class TemplateContentGenerator(ContentGenerator):
    placeholder_base_url = "https://placehold.co"

    def generate_script(self, topic, keywords=None, tone=None, length=None, max_length=None):
        # length/max_length only bound a real generator; the template is fixed
        intro = "Hi everyone!" if tone != "formal" else "Welcome."
        points = f" We will also cover {keywords}." if keywords else ""
        return (
            f"# Script: {topic}\n\n"
            f"## Introduction\n\n{intro} Today we are talking about {topic}.{points}\n\n"
            f"## Main content\n\n"
            f"Let's go through the following points:\n\n"
            f"1. What is {topic}?\n"
            f"2. Why does {topic} matter?\n"
            f"3. How to apply {topic} in your day-to-day.\n\n"
            f"## Conclusion\n\n"
            f"I hope you enjoyed this video about {topic}. Don't forget to like and subscribe to the channel!"
        )

    def generate_title(self, topic, keywords=None):
        return f"How {topic} can transform {keywords or 'your life'} | Complete Guide"

    def generate_image(self, prompt, style=None):
        text = quote(prompt[:60])
        return f"{self.placeholder_base_url}/1280x720?text={text}"

    def generate_audio(self, text, voice=None):
        return f"{self.placeholder_base_url}/audio/{voice or 'default'}.mp3"


_default_generator = TemplateContentGenerator()


def get_content_generator() -> ContentGenerator:
    return _default_generator
