"""Document chunking service."""

import re
from typing import List

from eulens.models.document import DocumentChunk

# A sentence is a run of text closed by terminal punctuation, or the
# unterminated tail of the document.
SENTENCE_PATTERN = re.compile(r"[^.!?]*[.!?]+|[^.!?]+\Z")


def split_sentences(text: str) -> List[str]:
    """
    Split text into sentences, keeping their punctuation and surrounding whitespace.

    Args:
        text: Raw text.

    Returns:
        Sentences in document order. Joined together they equal the input.
    """
    return SENTENCE_PATTERN.findall(text)


def chunk_text(text: str, max_chunk_size: int = 1000) -> List[str]:
    """
    Greedily pack whole sentences into chunks of at most max_chunk_size characters.

    A sentence longer than max_chunk_size becomes a chunk of its own and is
    never split.

    Args:
        text: Raw document text.
        max_chunk_size: Soft upper bound on chunk length.

    Returns:
        Stripped, non-empty chunks.
    """
    chunks = []
    current_chunk = ""

    for sentence in split_sentences(text):
        if len(current_chunk + sentence) <= max_chunk_size:
            current_chunk += sentence
        else:
            if current_chunk.strip():
                chunks.append(current_chunk.strip())
            current_chunk = sentence

    if current_chunk.strip():
        chunks.append(current_chunk.strip())
    return chunks


class ChunkingService:
    """Service for chunking documents into smaller pieces."""

    def __init__(self, chunk_size: int = 1000) -> None:
        """
        Initialize the chunking service.

        Args:
            chunk_size: Maximum characters per chunk.
        """
        self.chunk_size = chunk_size

    def chunk_document(self, content: str, name: str, url: str) -> List[DocumentChunk]:
        """
        Chunk a document into smaller pieces.

        Args:
            content: Document content to chunk.
            name: Name of the source document.
            url: URL the document was fetched from.

        Returns:
            List of chunks carrying their position in the document.
        """
        texts = chunk_text(content, self.chunk_size)
        return [
            DocumentChunk(
                text=text,
                source_url=url,
                document_name=name,
                chunk_index=idx,
                total_chunks=len(texts),
            )
            for idx, text in enumerate(texts)
        ]
