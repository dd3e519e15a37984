"""
Stopword tables used by the keyword tokenizer.
"""

# Pronouns, articles, connectives and filler verbs.
STOPWORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "be",
    "been", "being", "have", "has", "had", "do", "does", "did", "will",
    "would", "should", "could", "may", "might", "must", "can", "this",
    "that", "these", "those", "i", "you", "he", "she", "it", "we", "they",
    "what", "which", "who", "when", "where", "why", "how", "all", "each",
    "every", "both", "few", "more", "most", "other", "some", "such", "no",
    "nor", "not", "only", "own", "same", "so", "than", "too", "very", "s",
    "t", "just", "now", "also", "here", "there", "then", "them", "their",
    "our", "your", "its", "let", "get", "using", "use", "used", "like",
    "one", "two", "first", "second", "way", "time", "need", "want", "make",
    "see", "take", "know", "think", "come", "go", "look", "give", "allow",
    "allows", "find", "tell", "ask", "work", "seem", "feel", "try", "leave",
    "call",
})

# Generic software documentation vocabulary.
TECH_STOPWORDS = frozenset({
    "code", "example", "following", "above", "below", "file", "function",
    "method", "class", "object", "value", "type", "property", "parameter",
    "return", "returns", "import", "export", "default", "const", "let",
    "var", "async", "await", "true", "false", "null", "undefined", "new",
    "syntax", "usage", "note", "important", "warning", "tip",
})
