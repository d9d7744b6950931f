"""Project a resolved presentation into render contexts.

Pages get CSS custom properties, previews reuse the resolver on a draft tree,
and emails get a small, escaped token subset.
"""
from __future__ import annotations

import html
from typing import Any, Mapping

from briklyst.schemas.presentation import ResolvedPresentation
from briklyst.services.settings_resolver import apply_settings_changes, resolve_presentation

CSS_VAR_PREFIX = "--brk"

GENERIC_FONT_FAMILIES = frozenset(
    {
        "serif",
        "sans-serif",
        "monospace",
        "cursive",
        "fantasy",
        "system-ui",
        "ui-serif",
        "ui-sans-serif",
        "ui-monospace",
        "ui-rounded",
        "math",
        "emoji",
        "fangsong",
    }
)


def font_family_value(family: str) -> str:
    # generic keywords stop working once quoted
    if family.strip().lower() in GENERIC_FONT_FAMILIES:
        return family.strip().lower()
    return f'"{family}"'


def css_variables(presentation: ResolvedPresentation) -> dict[str, str]:
    colors = presentation.colors
    variables = {
        f"{CSS_VAR_PREFIX}-color-primary": colors.primary,
        f"{CSS_VAR_PREFIX}-color-secondary": colors.secondary,
        f"{CSS_VAR_PREFIX}-color-accent": colors.accent,
        f"{CSS_VAR_PREFIX}-color-background": colors.background,
        f"{CSS_VAR_PREFIX}-color-text": colors.text,
        f"{CSS_VAR_PREFIX}-font-heading": font_family_value(presentation.fonts.heading),
        f"{CSS_VAR_PREFIX}-font-body": font_family_value(presentation.fonts.body),
        f"{CSS_VAR_PREFIX}-spacing": presentation.layout.spacing,
        f"{CSS_VAR_PREFIX}-container-width": presentation.layout.container_width,
        f"{CSS_VAR_PREFIX}-radius": presentation.layout.border_radius,
        f"{CSS_VAR_PREFIX}-button-style": presentation.button_style,
        f"{CSS_VAR_PREFIX}-button-primary": presentation.branding.button_styles.primary,
        f"{CSS_VAR_PREFIX}-button-secondary": presentation.branding.button_styles.secondary,
        f"{CSS_VAR_PREFIX}-image-border": presentation.image_style.border,
        f"{CSS_VAR_PREFIX}-image-shadow": presentation.image_style.shadow,
        f"{CSS_VAR_PREFIX}-divider": presentation.accent_elements.dividers,
        f"{CSS_VAR_PREFIX}-icons": presentation.accent_elements.icons,
        f"{CSS_VAR_PREFIX}-product-card": presentation.accent_elements.product_card,
        f"{CSS_VAR_PREFIX}-banner-overlay": presentation.banner_style.overlay,
        f"{CSS_VAR_PREFIX}-banner-gradient": presentation.banner_style.gradient,
        f"{CSS_VAR_PREFIX}-base-size": f"{presentation.typography.base_size}px",
        f"{CSS_VAR_PREFIX}-type-scale": str(presentation.typography.scale),
    }
    return variables


def render_style_block(presentation: ResolvedPresentation) -> str:
    lines = [f"  {name}: {value};" for name, value in css_variables(presentation).items()]
    style = ":root {\n" + "\n".join(lines) + "\n}\n"
    if presentation.custom_css:
        style += presentation.custom_css + "\n"
    return style


def preview_presentation(
    stored: Mapping[str, Any] | None,
    draft: Mapping[str, Any],
) -> ResolvedPresentation:
    """Resolve stored settings with an unsaved draft layered on top.

    The draft goes through the same merge as a real save, so the preview can
    not drift from what a save would produce.
    """
    combined = dict(stored or {})
    combined.update(apply_settings_changes(stored, draft))
    return resolve_presentation(combined)


def email_tokens(presentation: ResolvedPresentation) -> dict[str, str]:
    # email clients get plain values only, never the style engine
    return {"primary_color": presentation.colors.primary}


def _escape_style_for_html(style: str) -> str:
    # keep custom CSS from closing the <style> element early
    return style.replace("</", "<\\/")


def render_storefront_page(view: Mapping[str, Any], presentation: ResolvedPresentation) -> str:
    storefront = view["storefront"]
    title = html.escape(storefront["title"])
    description = html.escape(storefront.get("description") or "")

    product_cards = []
    for product in view["products"]:
        image = ""
        if product.get("image_url"):
            image = f'<img src="{html.escape(product["image_url"])}" alt="{html.escape(product["title"])}" />'
        product_cards.append(
            f"""
        <article class="product-card">
          {image}
          <h3>{html.escape(product["title"])}</h3>
          <p>{html.escape(product.get("description") or "")}</p>
          <span class="price">${product["price"]:.2f}</span>
          <a class="button" href="{html.escape(product["affiliate_url"])}" data-product-id="{product["id"]}" rel="nofollow noopener" target="_blank">Shop</a>
        </article>"""
        )

    subscriber = presentation.subscriber_block
    subscribe_form = ""
    if subscriber.enabled:
        subscribe_form = f"""
      <section class="subscribe">
        <h2>{html.escape(subscriber.title)}</h2>
        <p>{html.escape(subscriber.description)}</p>
        <form method="post" action="/api/subscribe" data-storefront-id="{storefront["id"]}">
          <input type="email" name="email" required />
          <button class="button" type="submit">{html.escape(subscriber.button_text)}</button>
        </form>
      </section>"""

    social = "".join(
        f'<a href="{html.escape(link.url)}" rel="noopener">{html.escape(link.platform)}</a>'
        for link in presentation.social_links
    )
    banner_url = presentation.branding.banner or storefront.get("banner_url")
    banner = ""
    if banner_url:
        banner = f'<div class="banner" style="background-image: url(\'{html.escape(banner_url)}\')"></div>'

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{title}</title>
  <style>
{_escape_style_for_html(render_style_block(presentation))}
    body {{ margin: 0; background: var(--brk-color-background); color: var(--brk-color-text); font-family: var(--brk-font-body), sans-serif; font-size: var(--brk-base-size); }}
    h1, h2, h3 {{ font-family: var(--brk-font-heading), sans-serif; }}
    main {{ max-width: var(--brk-container-width); margin: 0 auto; padding: var(--brk-spacing); }}
    .banner {{ height: 220px; background-size: cover; background-position: center; box-shadow: inset 0 0 0 2000px var(--brk-banner-overlay); }}
    .products {{ display: grid; gap: var(--brk-spacing); grid-template-columns: repeat(auto-fill, minmax(220px, 1fr)); }}
    .product-card {{ border-radius: var(--brk-radius); border: var(--brk-image-border); box-shadow: var(--brk-image-shadow); padding: 1rem; }}
    .product-card img {{ width: 100%; border-radius: var(--brk-radius); }}
    .button {{ display: inline-block; background: var(--brk-button-primary); color: var(--brk-color-background); border-radius: var(--brk-radius); padding: 0.5rem 1rem; text-decoration: none; border: none; }}
    .price {{ color: var(--brk-color-accent); font-weight: 600; display: block; margin-bottom: 0.5rem; }}
  </style>
</head>
<body>
  {banner}
  <main>
    <header>
      <h1>{title}</h1>
      <p>{description}</p>
    </header>
    <section class="products">{"".join(product_cards)}
    </section>{subscribe_form}
    <footer>{social}</footer>
  </main>
</body>
</html>"""
