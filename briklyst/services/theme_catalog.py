"""Built-in visual themes.

Themes are defined here at build time and never mutated. Lookups fall back to
``DEFAULT_THEME_ID`` so presentation code always receives a complete theme.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class FontPair:
    heading: str
    body: str


@dataclass(frozen=True)
class ImageStyle:
    border: str
    shadow: str


@dataclass(frozen=True)
class AccentElements:
    dividers: str
    icons: str
    product_card: str


@dataclass(frozen=True)
class BannerStyle:
    overlay: str
    gradient: str


@dataclass(frozen=True)
class Theme:
    id: str
    name: str
    description: str
    vibe: str
    primary_color: str
    background_color: str
    text_color: str
    accent_color: str
    fonts: FontPair
    button_style: str
    image_style: ImageStyle
    accent_elements: AccentElements
    banner_style: BannerStyle

    def color_set(self) -> dict[str, str]:
        return {
            "primary": self.primary_color,
            "background": self.background_color,
            "text": self.text_color,
            "accent": self.accent_color,
        }

    def to_dict(self) -> dict:
        return asdict(self)


THEMES: tuple[Theme, ...] = (
    Theme(
        id="bubblegum-pop",
        name="Bubblegum Pop",
        description="Fun, bold, Gen Z aesthetic",
        vibe="playful",
        primary_color="#FF5DA2",
        background_color="#FDF2F8",
        text_color="#111827",
        accent_color="#FACC15",
        fonts=FontPair(heading="Poppins", body="Quicksand"),
        button_style="pill",
        image_style=ImageStyle(border="4px solid #FFFFFF", shadow="0 10px 25px rgba(255, 93, 162, 0.35)"),
        accent_elements=AccentElements(dividers="wavy", icons="filled", product_card="lifted"),
        banner_style=BannerStyle(overlay="rgba(255, 93, 162, 0.25)", gradient="linear-gradient(180deg, #FDF2F8 0%, #FCE7F3 100%)"),
    ),
    Theme(
        id="sleek-chic",
        name="Sleek & Chic",
        description="Minimalist beauty/lifestyle influencers",
        vibe="minimal",
        primary_color="#1A1A1A",
        background_color="#FFFFF0",
        text_color="#1F2937",
        accent_color="#FCE7F3",
        fonts=FontPair(heading="Playfair Display", body="Inter"),
        button_style="rounded",
        image_style=ImageStyle(border="none", shadow="0 1px 2px rgba(0, 0, 0, 0.08)"),
        accent_elements=AccentElements(dividers="hairline", icons="outline", product_card="flat"),
        banner_style=BannerStyle(overlay="rgba(0, 0, 0, 0.15)", gradient="none"),
    ),
    Theme(
        id="sunset-luxe",
        name="Sunset Luxe",
        description="Travel, sunset tones, warm & luxurious",
        vibe="warm",
        primary_color="#FF6D00",
        background_color="#FFF7ED",
        text_color="#1F2937",
        accent_color="#EAB308",
        fonts=FontPair(heading="Cormorant", body="Lora"),
        button_style="rounded",
        image_style=ImageStyle(border="1px solid #FED7AA", shadow="0 4px 12px rgba(255, 109, 0, 0.2)"),
        accent_elements=AccentElements(dividers="ornament", icons="duotone", product_card="framed"),
        banner_style=BannerStyle(overlay="rgba(124, 45, 18, 0.3)", gradient="linear-gradient(180deg, #FFF7ED 0%, #FBCEB1 100%)"),
    ),
    Theme(
        id="dreamy-lilac",
        name="Dreamy Lilac",
        description="Pastel and soft, dreamy creators",
        vibe="dreamy",
        primary_color="#B388EB",
        background_color="#FFFFFF",
        text_color="#374151",
        accent_color="#CCCCFF",
        fonts=FontPair(heading="Dancing Script", body="Quicksand"),
        button_style="pill",
        image_style=ImageStyle(border="2px solid #EDE9FE", shadow="0 8px 24px rgba(179, 136, 235, 0.25)"),
        accent_elements=AccentElements(dividers="dotted", icons="outline", product_card="soft"),
        banner_style=BannerStyle(overlay="rgba(179, 136, 235, 0.2)", gradient="linear-gradient(180deg, #FFFFFF 0%, #F5F3FF 100%)"),
    ),
    Theme(
        id="midnight-mode",
        name="Midnight Mode",
        description="Edgy, fashion-forward, bold aesthetics",
        vibe="edgy",
        primary_color="#1D1E33",
        background_color="#111827",
        text_color="#F3F4F6",
        accent_color="#3B82F6",
        fonts=FontPair(heading="Raleway", body="Roboto"),
        button_style="rounded",
        image_style=ImageStyle(border="1px solid #374151", shadow="0 12px 30px rgba(0, 0, 0, 0.6)"),
        accent_elements=AccentElements(dividers="solid", icons="filled", product_card="outlined"),
        banner_style=BannerStyle(overlay="rgba(0, 0, 0, 0.55)", gradient="linear-gradient(180deg, #111827 0%, #1D1E33 100%)"),
    ),
    Theme(
        id="coastal-cool",
        name="Coastal Cool",
        description="Beachy, clean, lifestyle and surf creators",
        vibe="breezy",
        primary_color="#7FFFD4",
        background_color="#F4E9D8",
        text_color="#1F2937",
        accent_color="#87CEEB",
        fonts=FontPair(heading="Nunito", body="Nunito"),
        button_style="rounded",
        image_style=ImageStyle(border="none", shadow="0 6px 18px rgba(135, 206, 235, 0.3)"),
        accent_elements=AccentElements(dividers="wave", icons="outline", product_card="soft"),
        banner_style=BannerStyle(overlay="rgba(135, 206, 235, 0.2)", gradient="linear-gradient(180deg, #F4E9D8 0%, #E0F7FA 100%)"),
    ),
    Theme(
        id="digital-bold",
        name="Digital Bold",
        description="Tech-savvy, Gen Alpha, gadget and gear creators",
        vibe="techy",
        primary_color="#8A2BE2",
        background_color="#F3F4F6",
        text_color="#111827",
        accent_color="#39FF14",
        fonts=FontPair(heading="JetBrains Mono", body="JetBrains Mono"),
        button_style="square",
        image_style=ImageStyle(border="2px solid #8A2BE2", shadow="4px 4px 0 #39FF14"),
        accent_elements=AccentElements(dividers="dashed", icons="pixel", product_card="outlined"),
        banner_style=BannerStyle(overlay="rgba(138, 43, 226, 0.35)", gradient="linear-gradient(135deg, #8A2BE2 0%, #39FF14 100%)"),
    ),
    Theme(
        id="classic-editorial",
        name="Classic Editorial",
        description="Clean, magazine-style, product-heavy creators",
        vibe="editorial",
        primary_color="#000000",
        background_color="#FFFFFF",
        text_color="#111827",
        accent_color="#F3F4F6",
        fonts=FontPair(heading="Playfair Display", body="Inter"),
        button_style="square",
        image_style=ImageStyle(border="none", shadow="none"),
        accent_elements=AccentElements(dividers="rule", icons="outline", product_card="flat"),
        banner_style=BannerStyle(overlay="rgba(0, 0, 0, 0.1)", gradient="none"),
    ),
    Theme(
        id="sleek-noir",
        name="Sleek Noir",
        description="Dark, glossy and understated",
        vibe="moody",
        primary_color="#111112",
        background_color="#18181B",
        text_color="#F5F5F7",
        accent_color="#2D2D32",
        fonts=FontPair(heading="Inter", body="Inter"),
        button_style="rounded",
        image_style=ImageStyle(border="1px solid #2D2D32", shadow="0 20px 40px rgba(0, 0, 0, 0.5)"),
        accent_elements=AccentElements(dividers="hairline", icons="outline", product_card="glass"),
        banner_style=BannerStyle(overlay="rgba(0, 0, 0, 0.45)", gradient="linear-gradient(180deg, #18181B 0%, #111112 100%)"),
    ),
)

DEFAULT_THEME_ID = "bubblegum-pop"


def get_theme(theme_id: str | None) -> Theme | None:
    if not theme_id:
        return None
    for theme in THEMES:
        if theme.id == theme_id:
            return theme
    return None


def find_theme_by_id(theme_id: str | None) -> Theme:
    return get_theme(theme_id) or get_theme(DEFAULT_THEME_ID)


def list_themes() -> list[dict]:
    return [theme.to_dict() for theme in THEMES]
