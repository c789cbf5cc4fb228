"""Kida templates for the built-in pages.

Templates live in a ``DictLoader`` so the package ships no data files.
The environment is built once, on first render.
"""

from functools import cache
from typing import Any

from kida import DictLoader, Environment

_NAV = """\
<nav class="site-nav">
{% for link in links %}\
<a href="{{ link.href }}"{% if link.current %} aria-current="page"{% end %}>{{ link.label }}</a>
{% end %}\
</nav>
"""

_POST = """\
<article class="post" data-id="{{ item.id }}">
  <header>
{% if item.username %}\
    <a href="/users/{{ item.username }}" class="post-user">{{ item.username }}</a>
{% end %}\
    <a href="/posts/{{ item.post_id }}"><time datetime="{{ item.created_at }}">{{ item.created_at }}</time></a>
  </header>
  <p>{{ item.content }}</p>
</article>
"""

TEMPLATES: dict[str, str] = {
    "home.html": _NAV
    + """\
<div class="container">
  <h1>Timeline</h1>
  <form id="post-form" class="post-form">
    <textarea placeholder="Write something..." maxlength="{{ max_length }}" required\
{% if compose.disabled %} disabled{% end %}{% if compose.focused %} autofocus{% end %}>\
{{ compose.value }}</textarea>
    <button class="post-form-button"{% if not compose.value %} hidden{% end %}\
{% if compose.disabled %} disabled{% end %}>Publish</button>
  </form>
  <button id="flush-queue-button" class="flush-posts-queue" aria-live="assertive" aria-atomic="true"\
{% if not pending_label %} hidden{% end %}>{{ pending_label }}</button>
  <div id="timeline-feed" role="feed" aria-busy="{{ busy }}">
{% for item in items %}"""
    + _POST
    + """{% end %}\
  </div>
{% if load_more %}\
  <button id="load-more-button" class="load-more-posts-button"{% if loading_more %} disabled{% end %}>Load more</button>
{% end %}\
</div>
""",
    "access.html": _NAV
    + """\
<div class="container">
  <h1>Welcome to Nakama</h1>
  <p>Log in to see your timeline.</p>
</div>
""",
    "user.html": _NAV
    + """\
<div class="container">
  <div class="user-profile">
{% if user.avatar_url %}\
    <img class="avatar" src="{{ user.avatar_url }}" alt="{{ user.username }}'s avatar">
{% end %}\
    <h1>{{ user.username }}</h1>
    <p><span>{{ user.followers_count }} followers</span> <span>{{ user.followees_count }} followees</span></p>
  </div>
</div>
""",
    "post.html": _NAV
    + """\
<div class="container">
"""
    + _POST
    + """\
  <p>{{ item.likes_count }} likes, {{ item.comments_count }} comments</p>
</div>
""",
    "not-found.html": _NAV
    + """\
<div class="container">
  <h1>Not Found Page</h1>
  <p>Nothing lives at <code>{{ path }}</code>.</p>
</div>
""",
    "error.html": """\
<div class="container">
  <h1>Error</h1>
  <p class="error-name">{{ name }}</p>
  <p>{{ message }}</p>
</div>
""",
}


@cache
def environment() -> Environment:
    """Return the shared kida Environment."""
    return Environment(loader=DictLoader(TEMPLATES), autoescape=True)


def render(template_name: str, **context: Any) -> str:
    """Render a built-in template to string."""
    return environment().get_template(template_name).render(context)
