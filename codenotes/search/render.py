"""Server-side rendering of the search page.

The page is a complete HTML document: sidebar navigation built from the
tag list, a search form, and the result list. It inlines the small script
for the mobile nav toggle and the "/" shortcut that focuses the search box.
"""

from datetime import UTC, datetime

from jinja2 import Environment

from codenotes.config import Settings
from codenotes.notes.tools import html_date_string, readable_date
from codenotes.search.models import SearchHit, SearchPage
from codenotes.tags.colors import slugify
from codenotes.tags.models import UNTAGGED, TagSummary
from codenotes.tags.tools import tag_badge, tag_dot

_jinja_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)
_jinja_env.filters["html_date_string"] = html_date_string
_jinja_env.filters["readable_date"] = readable_date
_jinja_env.filters["slugify"] = slugify
_jinja_env.globals["tag_badge"] = tag_badge
_jinja_env.globals["tag_dot"] = tag_dot

NO_RESULTS = "No results found."

SIDEBAR_LINK = """\
<a class="cn-sidebar-link" href="/tags/{{ tag.path | slugify }}">
  {{ tag_dot(tag.name) }}
  {{ tag.name }} ({{ tag.count }})
</a>
"""

SEARCH_PAGE_TEMPLATE = _jinja_env.from_string(
    """\
<!DOCTYPE html>
<html lang="{{ site.site_lang }}">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>Search Page | {{ site.site_title }}</title>
    <meta name="description" content="{{ site.site_description }}" />
    <link rel="shortcut icon" href="/public/favicon-32x32.png" type="image/png" />
    <link rel="stylesheet" href="/css/index.css" media="all" />
    <link rel="alternate" type="application/rss+xml" title="RSS" href="/feed.xml" />
  </head>
  <body>
    <div class="cn-layoutWrapper">
      <aside class="cn-sidebar">
        <div class="cn-sidebar-contentWrapper">
          <div class="cn-sidebar-top">
            <div class="cn-sidebar-wrapper">
              <div class="prose prose-zinc dark:prose-invert">
                <div class="cn-siteDescription">{{ site.site_description }}</div>
              </div>
              <nav>
                <a class="cn-sidebar-link uppercase" href="/">All notes</a>
{% for tag in tags %}
"""
    + SIDEBAR_LINK
    + """\
{% endfor %}
{% for tag in untagged %}
"""
    + SIDEBAR_LINK
    + """\
{% endfor %}
              </nav>
            </div>
          </div>
          <footer class="cn-sidebar-bottom cn-sidebar-wrapper text-sm">
            <div>
              &copy; {{ year }} &bull; Made by
              <a href="{{ site.author_url }}">{{ site.author_name }}</a> &bull;
              <a href="/colophon">Colophon</a> &bull;
              <a href="/feed.xml">RSS</a>
            </div>
          </footer>
        </div>
      </aside>

      <main id="main" class="cn-main">
        <div class="max-w-4xl mx-auto">
          <div class="flex items-center gap-6 mb-10">
            <button class="cn-nav" aria-label="Toggle navigation">&#9776;</button>
            <form class="grow" action="/search/">
              <label class="visually-hidden" for="query">Search notes</label>
              <input
                id="query"
                type="search"
                name="query"
                placeholder="Search notes"
                value="{{ page.query }}"
                class="searchInput"
              />
              <button class="visually-hidden">Search</button>
            </form>
          </div>
          <div class="container">
            <div class="prose prose-zinc dark:prose-invert mb-4">
              <h2 class="mb-3">You searched for: "{{ page.query }}"</h2>
            </div>
{% if page.hits %}
            <div>
{% for hit in page.hits %}
              <a href="{{ hit.url }}" class="noteListItem">
                <div class="noteListItem-title flex gap-3 items-center">
                  {% if hit.emoji %}<span>{{ hit.emoji }}</span>{% endif %}
                  {{ hit.title }}
                </div>
                <div class="flex gap-2 items-center">
{% if hit.tags %}
                  <div class="noteListItem-tags">
                    {% for tag in hit.tags %}{{ tag_badge(tag) }}{% if not loop.last %} {% endif %}{% endfor %}
                  </div>
{% endif %}
{% if hit.date %}
                  <time class="noteListItem-date" datetime="{{ hit.date | html_date_string }}">{{ hit.date | readable_date }}</time>
{% endif %}
                </div>
              </a>
{% endfor %}
            </div>
{% else %}
            <p>{{ no_results }}</p>
{% endif %}
          </div>
        </div>
      </main>
    </div>

    <script>
      const burger = document.querySelector('.cn-nav')
      const mainEl = document.querySelector('.cn-main')
      burger.addEventListener('click', () => {
        mainEl.toggleAttribute('open')
      })

      function isFormField(element) {
        if (!(element instanceof HTMLElement)) {
          return false
        }
        const name = element.nodeName.toLowerCase()
        const type = (element.getAttribute('type') || '').toLowerCase()
        return (
          name === 'select' ||
          name === 'textarea' ||
          (name === 'input' && type !== 'submit' && type !== 'reset') ||
          element.isContentEditable
        )
      }

      const inputEl = document.querySelector('.searchInput')
      document.addEventListener('keydown', (event) => {
        if (event.target instanceof Node && isFormField(event.target)) {
          return
        }
        if (!event.isComposing && event.key === '/') {
          event.preventDefault()
          inputEl.focus()
        }
      })
    </script>
  </body>
</html>
"""
)


def render_search_page(
    query: str,
    hits: list[SearchHit],
    tag_list: list[TagSummary],
    settings: Settings,
    now: datetime | None = None,
) -> str:
    """Render the full search results document.

    Args:
        query: The query as typed; shown back in the form and heading
        hits: Results in index order
        tag_list: Tag summaries for the sidebar
        settings: Site metadata (title, description, author)
        now: Clock for the footer year

    Returns:
        A complete HTML document
    """
    page = SearchPage(query=query, hits=hits)
    return SEARCH_PAGE_TEMPLATE.render(
        page=page,
        tags=[t for t in tag_list if t.name != UNTAGGED],
        untagged=[t for t in tag_list if t.name == UNTAGGED],
        site=settings,
        year=(now or datetime.now(UTC)).year,
        no_results=NO_RESULTS,
    )
