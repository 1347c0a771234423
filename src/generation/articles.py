"""Prompt building and text post-processing for generated news articles."""

import logging
import re

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

MAX_TOPIC_LENGTH = 200
MAX_TITLE_LENGTH = 160
MIN_ARTICLE_WORDS = 500
MAX_ARTICLE_WORDS = 700

DEFAULT_IMAGE_TOPIC = "technology privacy"

CITATIONS_HEADING = "Källor:"

IMAGE_PROMPT_TEMPLATE = (
    "Skapa en visuellt slagkraftig bild (fotorealistisk eller digital illustration) "
    'som passar till en nyhetsartikel om "{topic}". Returnera endast bilden.'
)

COMFYUI_PROMPT_TEMPLATE = (
    "Skapa en visuellt slagkraftig bild (fotorealistisk eller digital illustration) "
    'som passar till en nyhetsartikel om "{topic}". Stilen ska vara professionell och '
    "journalistisk."
)

_ARTICLE_PROMPT_TEMPLATE = """Du är en professionell svensk journalist. Skriv en välstrukturerad och engagerande nyhetsartikel om "{topic}".

STRUKTUR:
1. Rubrik: En kort, fängslande rubrik på en rad (max 160 tecken)
2. Ingress: Ett inledande stycke som sammanfattar artikelns huvudpoäng
3. Brödtext: 4-6 välskrivna stycken som utvecklar ämnet i detalj
4. Avslutning: Ett sammanfattande eller framåtblickande stycke

LÄNGD: Artikeln ska vara mellan 500-700 ord (exklusive rubrik).

INNEHÅLL:
- Skriv i en objektiv, journalistisk ton
- Använd tydliga och engagerande formuleringar
- Undvik upprepningar och fyllnadsord
{source_instructions}
Skriv artikeln nu:"""

_SOURCE_INSTRUCTIONS = """- Inkludera specifika namn, organisationer och datum från källorna
- Referera till källorna i texten med (Källa 1), (Källa 2) etc.

Tillgängliga källor:
{source_context}
"""

_HTML_TAG = re.compile(r"<[^>]*>")
_ANGLE_BRACKETS = re.compile(r"[<>]")
_JAVASCRIPT_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+\s*=", re.IGNORECASE)

_HEADING_PREFIX = re.compile(r"^\s*#+\s*")
_MARKDOWN_LINK = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_CITATIONS_SECTION = re.compile(r"\n\n" + CITATIONS_HEADING + r"\n[\s\S]*$")


class ArticleSource(BaseModel):
    """A web source an article was based on."""

    title: str = Field(..., description="Source title")
    url: str = Field(..., description="Source URL")
    snippet: str = Field("", description="Short excerpt used as prompt context")


def validate_topic(topic: object) -> str:
    """Validate and sanitise a user-supplied article topic.

    Strips HTML tags, angle brackets, ``javascript:`` and inline event
    handlers before the topic is placed into a prompt.

    :param topic: The raw topic value from the request body.
    :returns: The sanitised topic.
    :raises ValueError: With a user-facing message if the topic is unusable.
    """
    if not isinstance(topic, str):
        raise ValueError("Ämne saknas eller är ogiltigt")

    trimmed = topic.strip()
    if not trimmed:
        raise ValueError("Ämne får inte vara tomt")
    if len(trimmed) > MAX_TOPIC_LENGTH:
        raise ValueError(f"Ämne får inte vara längre än {MAX_TOPIC_LENGTH} tecken")

    sanitised = _HTML_TAG.sub("", trimmed)
    sanitised = _ANGLE_BRACKETS.sub("", sanitised)
    sanitised = _JAVASCRIPT_PROTOCOL.sub("", sanitised)
    sanitised = _EVENT_HANDLER.sub("", sanitised).strip()

    if not sanitised:
        raise ValueError("Ämne innehåller endast ogiltiga tecken")
    return sanitised


def extract_title(text: str) -> str:
    """Turn the first line of generated text into a plain-text title.

    :param text: The generated article text.
    :returns: The title without markdown, at most 160 characters.
    """
    first_line = text.split("\n", 1)[0] if text else ""

    title = _HEADING_PREFIX.sub("", first_line)
    title = title.replace("**", "").replace("*", "").replace("__", "").replace("_", "")
    title = _MARKDOWN_LINK.sub(r"\1", title)
    title = title.replace("`", "").strip()

    if len(title) > MAX_TITLE_LENGTH:
        title = title[: MAX_TITLE_LENGTH - 3] + "..."
    return title


def split_article(text: str) -> tuple[str, str]:
    """Split generated text into a title and a body.

    :param text: The generated article text.
    :returns: ``(title, content)``; the content falls back to the whole text
        when there is nothing after the first line.
    """
    title = extract_title(text)
    _, _, rest = text.partition("\n")
    content = rest.strip() or text.strip()
    return title, content


def count_words(text: str) -> int:
    """Count the words of an article body, ignoring the citation list.

    :param text: The article body.
    :returns: Number of whitespace-separated words.
    """
    if not text:
        return 0
    return len(_CITATIONS_SECTION.sub("", text).split())


def check_article_length(content: str) -> int:
    """Count words and warn when the article falls outside the target length.

    :param content: The article body.
    :returns: The word count.
    """
    word_count = count_words(content)
    if word_count < MIN_ARTICLE_WORDS:
        logger.warning(f"Generated article is short: {word_count} words (min {MIN_ARTICLE_WORDS})")
    elif word_count > MAX_ARTICLE_WORDS:
        logger.warning(f"Generated article is long: {word_count} words (max {MAX_ARTICLE_WORDS})")
    return word_count


def format_source_citations(sources: list[ArticleSource]) -> str:
    """Format sources as a numbered citation list to append to an article.

    :param sources: The article sources.
    :returns: The citation block, or an empty string when there are no sources.
    """
    if not sources:
        return ""
    citations = "\n".join(
        f"{index}. {source.title} ({source.url})" for index, source in enumerate(sources, start=1)
    )
    return f"\n\n{CITATIONS_HEADING}\n{citations}"


def build_article_prompt(topic: str, sources: list[ArticleSource] | None = None) -> str:
    """Build the Swedish journalist prompt for an article.

    :param topic: The sanitised topic.
    :param sources: Optional sources to cite; their snippets become prompt context.
    :returns: The prompt text.
    """
    source_instructions = ""
    if sources:
        source_context = "\n\n".join(
            f"Källa {index}: {source.title}\nURL: {source.url}\nUtdrag: {source.snippet}"
            for index, source in enumerate(sources, start=1)
        )
        source_instructions = _SOURCE_INSTRUCTIONS.format(source_context=source_context)
    return _ARTICLE_PROMPT_TEMPLATE.format(topic=topic, source_instructions=source_instructions)


def build_image_prompt(topic: str, template: str = IMAGE_PROMPT_TEMPLATE) -> str:
    """Build an image prompt for an article topic.

    :param topic: The article topic.
    :param template: Prompt template with a ``{topic}`` placeholder.
    :returns: The prompt text.
    """
    return template.format(topic=topic)
