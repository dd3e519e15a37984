"""
Topic extraction from page headings.
H1 headings are main topics, H2 headings their subtopics; H3 headings are
listed with their nearest H2 (or H1) as parent but not aggregated.
"""

from dataclasses import dataclass, field
from pathlib import Path

from .markdown_walker import HEADING, parse_blocks
from .pages import MARKDOWN_SUFFIXES, load_pages


@dataclass
class Topic:
    level: int
    title: str
    source: str
    parent: str | None = None

    def to_dict(self) -> dict:
        data = {"level": self.level, "title": self.title, "source": self.source}
        if self.parent is not None:
            data["parent"] = self.parent
        return data


@dataclass
class TopicNode:
    """A main topic or subtopic with the pages it appears on."""

    title: str
    level: int
    count: int = 1
    pages: list[str] = field(default_factory=list)
    subtopics: list["TopicNode"] = field(default_factory=list)

    def add_page(self, source: str) -> None:
        if source not in self.pages:
            self.pages.append(source)

    def to_dict(self) -> dict:
        data = {"title": self.title, "level": self.level, "count": self.count, "pages": list(self.pages)}
        if self.level == 1:
            data["subtopics"] = [st.to_dict() for st in self.subtopics]
        return data


def extract_topics_from_content(content: str, filename: str) -> list[Topic]:
    topics: list[Topic] = []
    current_h1 = None
    current_h2 = None

    for node in parse_blocks(content):
        if node.type != HEADING or not node.text:
            continue
        topic = Topic(level=node.level, title=node.text, source=filename)
        if node.level == 1:
            current_h1 = node.text
            current_h2 = None
        elif node.level == 2:
            current_h2 = node.text
            topic.parent = current_h1
        elif node.level == 3:
            topic.parent = current_h2 or current_h1
        topics.append(topic)

    return topics


def build_topic_hierarchy(topics: list[Topic]) -> dict[str, TopicNode]:
    """
    Group H1 topics by title and attach H2 subtopics to their parent.
    Subtopics whose parent is not a known main topic are dropped.
    """
    hierarchy: dict[str, TopicNode] = {}

    for topic in topics:
        if topic.level != 1:
            continue
        node = hierarchy.get(topic.title)
        if node is None:
            hierarchy[topic.title] = TopicNode(topic.title, 1, pages=[topic.source])
        else:
            node.count += 1
            node.add_page(topic.source)

    for topic in topics:
        if topic.level != 2 or topic.parent not in hierarchy:
            continue
        parent = hierarchy[topic.parent]
        existing = next((st for st in parent.subtopics if st.title == topic.title), None)
        if existing is None:
            parent.subtopics.append(TopicNode(topic.title, 2, pages=[topic.source]))
        else:
            existing.count += 1
            existing.add_page(topic.source)

    return hierarchy


def extract_topics(
    docs_path: Path,
    *,
    workers: int | None = None,
    skip_unreadable: bool = False,
) -> dict:
    """Topic analysis over every .md page of a bundle."""
    all_topics: list[Topic] = []
    for filename, content in load_pages(
        docs_path, MARKDOWN_SUFFIXES, workers=workers, skip_unreadable=skip_unreadable
    ):
        all_topics.extend(extract_topics_from_content(content, filename))

    hierarchy = build_topic_hierarchy(all_topics)
    main_topics = list(hierarchy)
    return {
        "topics": [t.to_dict() for t in all_topics],
        "hierarchy": {title: node.to_dict() for title, node in hierarchy.items()},
        "topicCount": len(all_topics),
        "mainTopics": main_topics,
        "mainTopicCount": len(main_topics),
        "subtopicCount": sum(len(node.subtopics) for node in hierarchy.values()),
    }
