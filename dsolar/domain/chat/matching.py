"""
Rule-based answering for the site chatbot: package lookups, price lists and FAQ scoring.
Everything here is pure so it can be tested without a database.
"""
import re
from typing import Optional

from ... import config

# Package references, tried in order
PACKAGE_CODE_RE = re.compile(r"\b([A-Z]{3}-\d+K\d*-P\d+|[A-Z]{3}-\d+PK)\b", re.IGNORECASE)
PACKAGE_NUMBER_RE = re.compile(r"\b(?:package|pkg|p)\s*#?\s*(\d+)\b", re.IGNORECASE)
PACKAGE_PREFIX_RE = re.compile(r"\b(ONG|HYB)[-\s]*([0-9]+K?[0-9]*[-\s]*P?[0-9]*)\b", re.IGNORECASE)

SOFTWARE_TERMS = ["virus", "malware", "software", "hack", "computer", "laptop", "phone"]
UNRELATED_INSTALL_TERMS = [
    "virus", "software", "program", "app", "application", "download",
    "computer", "laptop", "phone", "mobile", "install virus",
    "malware", "spyware", "adware", "trojan", "worm", "hack", "hacking",
]

PRICING_KEYWORDS = [
    "price", "pricing", "cost", "how much is", "how much does", "how much for",
    "package", "packages", "quotation", "quote", "rates", "budget", "magkano",
]

SOLAR_KEYWORDS = [
    "solar", "panel", "pv", "photovoltaic", "sun", "renewable",
    "grid", "battery", "inverter", "roof", "electricity", "energy",
    "power", "dsolar", "d-solar", "net metering", "off-grid", "on-grid",
    "hybrid", "installation", "meralco", "kilowatt", "kw", "kwh", "watt",
]
NON_SOLAR_KEYWORDS = [
    "rice", "food", "grocery", "appliance", "car", "vehicle", "clothes",
    "shoes", "phone", "computer", "laptop", "tv", "television", "house",
    "condo", "rent", "apartment", "medicine", "doctor", "hospital",
    "restaurant", "hotel", "flight", "travel", "vacation",
]

# Terms that make an FAQ relevant context when both the query and its question mention them
SOLAR_TOPICS = [
    "panel", "battery", "grid", "energy", "power", "electricity",
    "cost", "price", "saving", "install", "roof", "hybrid", "sun",
    "solar", "kwh", "inverter", "net meter", "metering", "cell",
]

FAQ_MATCH_THRESHOLD = 30
FAQ_CONTEXT_THRESHOLD = 15
FAQ_CONTEXT_LIMIT = 5
TEXT_MATCH_MIN_SCORE = 1.0
TEXT_CONTEXT_LIMIT = 3
GENERAL_FAQ_IDS = ["savings", "system-difference", "cost"]

FAQ_EMOJIS = {
    "installment-plans": "💳",
    "how-to-avail": "📄",
    "quotation": "📊",
    "savings": "💰",
    "zero-bill": "0️⃣",
    "location": "📍",
    "system-difference": "⚡",
    "cost": "💵",
    "night-operation": "🌙",
    "power-outage": "⚠️",
    "cloudy-days": "☁️",
    "maintenance": "🛠️",
    "free-maintenance": "🆓",
    "lifespan": "⏱️",
    "warranty": "🔒",
    "installation-time": "⏰",
    "permits": "📋",
    "roof-damage": "🏠",
    "roof-space": "📏",
    "panel-size": "📐",
    "add-panels": "➕",
    "monitoring": "📱",
    "component-replacement": "🔄",
    "net-metering": "🔌",
    "payback": "💸",
    "battery-need": "🔋",
    "space-requirements": "🏡",
    "service-locations": "🗺️",
    "brands-used": "🏭",
}
DEFAULT_EMOJI = "🌞"

_PUNCTUATION_RE = re.compile(r"[?!.,;:\-'\"]")
_LEADING_QUESTION_RE = re.compile(r"^(what|how|when|where|why|can|do|does|is|are|will)\s+")
_FILLER_PHRASES = ("tell me", "i want to know", "please")
_STOPWORDS = {"a", "an", "the", "to", "for", "in", "on", "with", "of", "about"}
_SOURCE_CITATION_RE = re.compile(r"\[Source:.*?\]")
_THINKING_PATTERNS = [
    re.compile(r"<think>[\s\S]*?</think>"),
    re.compile(r"^<think>.*$", re.MULTILINE),
    re.compile(r"^Think(ing)?:.*$", re.MULTILINE),
]


def _contains_word(text: str, keyword: str) -> bool:
    return re.search(rf"\b{re.escape(keyword)}\b", text) is not None


def _starts_word(text: str, keyword: str) -> bool:
    return re.search(rf"\b{re.escape(keyword)}", text) is not None


def normalize_question(text: str) -> str:
    """Lowercase, strip punctuation, the leading question word and filler words"""
    text = _PUNCTUATION_RE.sub(" ", text.lower())
    text = " ".join(text.split())
    text = _LEADING_QUESTION_RE.sub("", text)
    for phrase in _FILLER_PHRASES:
        text = text.replace(phrase, " ")
    return " ".join(word for word in text.split() if word not in _STOPWORDS)


def is_software_install_query(query: str) -> bool:
    q = query.lower()
    if "install" not in q or "installment" in q:
        return False
    return any(term in q for term in UNRELATED_INSTALL_TERMS)


def is_software_redirect_query(query: str) -> bool:
    q = query.lower()
    return "install" in q and any(term in q for term in SOFTWARE_TERMS)


def is_pricing_query(query: str) -> bool:
    q = query.lower()
    return any(_starts_word(q, keyword) for keyword in PRICING_KEYWORDS)


def is_off_topic(query: str) -> bool:
    """Clearly about something else and mentions nothing solar"""
    q = query.lower()
    if any(_starts_word(q, keyword) for keyword in SOLAR_KEYWORDS):
        return False
    return any(_contains_word(q, keyword) for keyword in NON_SOLAR_KEYWORDS)


def _word_overlap_points(query_words: list[str], faq_words: list[str]) -> int:
    if not query_words or not faq_words:
        return 0
    shared = [word for word in query_words if word in faq_words]
    overlap = max(len(shared) / len(query_words), len(shared) / len(faq_words))
    if overlap > 0.7:
        return 30
    if overlap > 0.5:
        return 20
    if overlap > 0.3:
        return 10
    return 0


def _question_similarity(q: str, question: str) -> int:
    normalized_q = normalize_question(q)
    normalized_faq = normalize_question(question)
    score = 0

    if question == q:
        score += 100
    elif q and (q in question or question in q):
        score += 50

    if normalized_faq == normalized_q:
        score += 80
    elif normalized_q and (normalized_q in normalized_faq or normalized_faq in normalized_q):
        score += 40

    score += _word_overlap_points(
        [w for w in normalized_q.split() if len(w) > 3],
        [w for w in normalized_faq.split() if len(w) > 3],
    )
    return score


def score_faq(query: str, faq: dict) -> int:
    """Score for answering directly with an FAQ: +10 per keyword hit plus question similarity"""
    q = query.lower().strip()
    if is_software_install_query(q):
        return 0

    question = faq["question"].lower()
    score = 10 * sum(1 for keyword in faq.get("keywords", []) if keyword.lower() in q)
    return score + _question_similarity(q, question)


def score_faq_context(query: str, faq: dict) -> int:
    """Score for LLM context: a flat +30 for any keyword hit, +15 for a shared solar topic"""
    q = query.lower().strip()
    if is_software_install_query(q):
        return 0

    question = faq["question"].lower()
    score = 0
    if any(keyword.lower() in q for keyword in faq.get("keywords", [])):
        score += 30
    score += _question_similarity(q, question)
    if any(topic in q and topic in question for topic in SOLAR_TOPICS):
        score += 15
    return score


def rank_faqs(query: str, faqs: list[dict], scorer=score_faq) -> list[tuple[int, dict]]:
    scored = [(scorer(query, faq), faq) for faq in faqs]
    scored.sort(key=lambda item: item[0], reverse=True)
    return scored


def best_faq(query: str, faqs: list[dict]) -> Optional[dict]:
    ranked = rank_faqs(query, faqs)
    if ranked and ranked[0][0] >= FAQ_MATCH_THRESHOLD:
        return ranked[0][1]
    return None


def accept_text_match(query: str, faq: dict) -> bool:
    """Whether a full-text search hit is good enough to answer with"""
    if faq.get("score", 0) <= TEXT_MATCH_MIN_SCORE:
        return False
    keywords = " ".join(faq.get("keywords", [])).lower()
    if "install" in keywords:
        q = query.lower()
        return not any(term in q for term in UNRELATED_INSTALL_TERMS)
    return True


def relevant_faqs(query: str, faqs: list[dict]) -> list[dict]:
    """Top FAQs to ground an LLM answer; empty when nothing scores high enough"""
    ranked = rank_faqs(query, faqs, scorer=score_faq_context)
    return [faq for score, faq in ranked if score >= FAQ_CONTEXT_THRESHOLD][:FAQ_CONTEXT_LIMIT]


def general_faqs(faqs: list[dict]) -> list[dict]:
    return [faq for faq in faqs if faq["faq_id"] in GENERAL_FAQ_IDS][:2]


def format_faq_answer(faq: dict) -> str:
    answer = _SOURCE_CITATION_RE.sub("", faq["answer"]).strip()
    return f"{FAQ_EMOJIS.get(faq['faq_id'], DEFAULT_EMOJI)} {answer}"


def _peso(amount: float) -> str:
    return f"₱{amount:,.2f}"


def format_package_card(package: dict) -> str:
    return (
        f"{DEFAULT_EMOJI} **{package['name']} ({package['wattage']:,} Watts)**\n"
        f"- {package['suitable_for']}\n"
        f"- **Financing (VAT-Inc):** {_peso(package['financing_price'])}\n"
        f"- **SRP (VAT-Ex):** {_peso(package['srp_price'])}\n"
        f"- **Cash (VAT-Ex):** {_peso(package['cash_price'])}\n\n"
        f"{package['description']}\n\n"
        "_Note: Prices are for Metro Manila installation only. "
        "Additional transport costs apply for areas outside Metro Manila._"
    )


def _price_section(title: str, packages: list[dict]) -> str:
    lines = [f"{title}\n"]
    for index, package in enumerate(packages, start=1):
        lines.append(f"{index}. **{package['code']}** ({package['wattage']:,}W)")
        lines.append(f"   - 🏠 {package['suitable_for']}")
        lines.append(f"   - 💵 Cash: ₱{package['cash_price']:,.0f}\n")
    return "\n".join(lines) + "\n"


def format_price_list(packages: list[dict]) -> str:
    if not packages:
        return (
            "No package information available at the moment. "
            f"Please contact us at {config.COMPANY_PHONE} for more information."
        )

    ongrid = [p for p in packages if p["type"] == "ongrid"]
    small = [
        p for p in packages
        if p["type"] == "hybrid-small" or (p["type"] == "hybrid" and "10.24kWh" not in p["description"])
    ]
    large = [
        p for p in packages
        if p["type"] == "hybrid-large" or (p["type"] == "hybrid" and "10.24kWh" in p["description"])
    ]

    text = "💰 **Our Solar Package Pricing** 💰\n\n"
    if ongrid:
        text += _price_section("🔌 **OnGrid Systems (Grid-Tied, No Battery):**", ongrid)
    if small:
        text += _price_section("🔋 **Hybrid Systems with 5.12kWh Battery:**", small)
    if large:
        text += _price_section("🔋🔋 **Hybrid Systems with 10.24kWh Battery:**", large)
    text += (
        "📍 _Prices above are for Metro Manila installation. For more details on any package "
        "or to get a personalized quote, ask about a specific package code or contact us at "
        f"{config.COMPANY_PHONE}._"
    )
    return text


def package_code_queries(message: str) -> list[dict]:
    """Mongo filters to try, in order, for a package the message refers to"""
    match = PACKAGE_CODE_RE.search(message)
    if match:
        return [{"code": match.group(1).upper()}]

    match = PACKAGE_NUMBER_RE.search(message)
    if match:
        number = match.group(1)
        return [
            {"code": {"$regex": f"-P{number}$", "$options": "i"}},
            {"code": {"$regex": f"P{number}", "$options": "i"}},
        ]

    match = PACKAGE_PREFIX_RE.search(message)
    if match:
        prefix = match.group(1).upper()
        suffix = re.sub(r"\s+", "", match.group(2)).upper()
        queries = [
            {"code": {"$regex": f"^{re.escape(candidate)}", "$options": "i"}}
            for candidate in (f"{prefix}-{suffix}", f"{prefix}{suffix}")
        ]
        parts = [re.escape(part) for part in re.split(r"[^0-9A-Z]+", suffix) if part]
        queries.append({"code": {"$regex": ".*".join([prefix, *parts]), "$options": "i"}})
        return queries

    return []


def clean_llm_reply(text: str) -> str:
    """Drop reasoning traces and blank lines some models emit"""
    for pattern in _THINKING_PATTERNS:
        text = pattern.sub("", text)
    return "\n".join(line.strip() for line in text.splitlines() if line.strip())
