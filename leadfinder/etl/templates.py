"""Text templates generated per business: an AI site-builder prompt and an outreach e-mail."""

from leadfinder.core.models import Business

BUILD_PROMPT_TEMPLATE = """Build a business website for "{name}" located at "{address}".
Industry: {category}.
Their phone number is {phone}.
They currently do not have a website.
Create a modern, responsive, SEO-optimized website suitable for their business. Include sections for Home, About, Services, and Contact."""

OUTREACH_TEMPLATE = """Subject: Quick question about {name}

Hi {name} team,

{social_proof}, but I was surprised to see that you don't have a website listed.

I help local {category} businesses like yours establish a professional online presence to attract more customers.

In today's digital age, 97% of consumers search online for local services. Without a website, you might be missing out on valuable leads that are going to competitors.

I'd love to build you a modern, mobile-friendly website that highlights your services and reviews.

Are you open to a quick 5-minute chat this week to discuss how we can get {name} online?

Best regards,
[Your Name]
Web Developer"""

RATING_PRAISE_THRESHOLD = 4.0


def build_prompt(business: Business) -> str:
    return BUILD_PROMPT_TEMPLATE.format(
        name=business.name,
        address=business.address,
        category=business.category or "General Business",
        phone=business.phone_number or "Not listed",
    )


def outreach_message(business: Business) -> str:
    if business.rating and business.rating > RATING_PRAISE_THRESHOLD:
        social_proof = f"I noticed you have a fantastic {_format_rating(business.rating)}-star rating on Google"
    else:
        social_proof = f"I found your business listed in {_locality(business.address)}"

    return OUTREACH_TEMPLATE.format(
        name=business.name,
        social_proof=social_proof,
        category=business.category or "business",
    )


def _locality(address: str) -> str:
    """Second comma-separated segment of the address, e.g. the city in "1 Main St, Springfield, USA"."""
    segments = (address or "").split(",")
    if len(segments) < 2 or not segments[1].strip():
        return "the area"
    return segments[1].strip()


def _format_rating(rating: float) -> str:
    """Shortest round-trip form of the rating without a trailing ".0" (5.0 -> "5", 4.123456789 kept whole)."""
    text = repr(float(rating))
    return text[:-2] if text.endswith(".0") else text
