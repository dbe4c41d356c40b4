import html
from typing import Any, List, Mapping, Optional, Union

from superagent.slides.models import Palette, Slide, SlideKind, get_palette

SlideLike = Union[Slide, Mapping[str, Any]]

# Fixed stylesheet; only palette values vary between styles.
BASE_CSS_TEMPLATE = """
    .slide-container {{ width: 100%; height: 100%; isolation: isolate; }}
    .slide-container * {{ margin: 0; padding: 0; box-sizing: border-box; }}
    .slide-container .slide {{ width: 100%; height: 100%; min-height: 500px; background: {background}; color: {text}; font-family: 'SF Pro Display', -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; display: flex; flex-direction: column; justify-content: center; align-items: center; padding: 40px; position: relative; overflow: hidden; }}
    .slide-container .slide::before {{ content: ''; position: absolute; top: 0; left: 0; right: 0; bottom: 0; background: rgba(0, 0, 0, 0.1); z-index: 1; }}
    .slide-container .slide-content {{ position: relative; z-index: 2; text-align: center; max-width: 800px; width: 100%; }}
    .slide-container h1 {{ font-size: 3rem; font-weight: 700; margin-bottom: 1.5rem; line-height: 1.2; letter-spacing: -0.025em; color: {text}; }}
    .slide-container h2 {{ font-size: 2.5rem; font-weight: 600; margin-bottom: 1.5rem; line-height: 1.2; letter-spacing: -0.025em; color: {text}; }}
    .slide-container .subtitle {{ font-size: 1.25rem; font-weight: 400; opacity: 0.9; margin-bottom: 2rem; }}
    .slide-container .content-card {{ background: {card_bg}; color: {card_text}; padding: 2rem; border-radius: 16px; border-top: 4px solid {secondary}; box-shadow: 0 20px 40px rgba(0,0,0,0.1), 0 10px 20px rgba(0,0,0,0.05); margin-top: 2rem; text-align: left; }}
    .slide-container .content-card p {{ font-size: 0.95rem; line-height: 1.6; margin-bottom: 1rem; }}
    .slide-container .bullets {{ list-style: none; padding: 0; margin: 0; }}
    .slide-container .bullets li {{ font-size: 0.95rem; line-height: 1.6; margin-bottom: 1rem; padding-left: 2rem; position: relative; }}
    .slide-container .bullets li::before {{ content: '\\2022'; color: {accent}; font-size: 1.5rem; position: absolute; left: 0; top: 0; }}
    .slide-container .slide-number {{ position: absolute; bottom: 20px; right: 20px; font-size: 0.9rem; opacity: 0.7; z-index: 3; color: {primary}; }}
"""

SLIDE_WRAPPER = '<div class="slide-container"><div class="slide"><div class="slide-content">{body}</div></div></div>'

def build_css(palette: Palette) -> str:
    return BASE_CSS_TEMPLATE.format(**palette.model_dump())

def _text(value: Any) -> str:
    if value is None:
        return ""
    return html.escape(str(value), quote=False)

def _read(slide: SlideLike, key: str, default: Any = None) -> Any:
    if isinstance(slide, Slide):
        return getattr(slide, key, default)
    return slide.get(key, default)

def _kind(slide: SlideLike) -> str:
    kind = _read(slide, "type")
    if isinstance(kind, SlideKind):
        return kind.value
    return str(kind) if kind is not None else SlideKind.CONTENT.value

def render_slide_html(slide: SlideLike, style: Optional[str] = None) -> str:
    """
    Renders one slide into a self-contained HTML fragment.

    Pure function of the slide fields and the style: rendering the same input twice yields the same
    bytes. Unknown kinds render as content slides and unknown styles use the professional palette.
    """
    palette = get_palette(style)
    title = _text(_read(slide, "title"))
    content = _text(_read(slide, "content"))
    kind = _kind(slide)

    if kind == SlideKind.TITLE.value:
        subtitle = f'<p class="subtitle">{content}</p>' if content else ''
        body = f'<h1>{title}</h1>{subtitle}'
    elif kind == SlideKind.BULLET.value:
        bullet_points: List[Any] = _read(slide, "bulletPoints") or []
        items = "".join(f"<li>{_text(bullet)}</li>" for bullet in bullet_points)
        bullets_html = f'<ul class="bullets">{items}</ul>' if bullet_points else ''
        body = f'<h2>{title}</h2><div class="content-card">{bullets_html}</div>'
    else:
        body = f'<h2>{title}</h2><div class="content-card"><p>{content}</p></div>'

    return f"<style>{build_css(palette)}</style>{SLIDE_WRAPPER.format(body=body)}"

def decorate_slides(slides: List[Slide], style: Optional[str] = None) -> List[Slide]:
    return [slide.model_copy(update={"html": render_slide_html(slide, style)}) for slide in slides]
