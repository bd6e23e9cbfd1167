"""Default agent roster shown on a freshly seeded dashboard."""

DEFAULT_AGENTS = [
    {"id": "codesmith", "name": "Codesmith", "role": "Developer Agent", "avatar": "💻"},
    {"id": "wordsmith", "name": "Wordsmith", "role": "Content Agent", "avatar": "✍️"},
    {"id": "architect", "name": "Architect", "role": "System Design", "avatar": "📐"},
    {"id": "research", "name": "Research", "role": "Research Agent", "avatar": "🔍"},
    {"id": "designmind", "name": "DesignMind", "role": "Design Agent", "avatar": "🎨"},
    {"id": "auditor", "name": "Auditor", "role": "Audit Agent", "avatar": "📋"},
    {"id": "operator", "name": "Operator", "role": "Operations", "avatar": "⚙️"},
]
