from project_utils.starter_class import get_logger

logger = get_logger(__name__)


def search_projects(projects_data, keyword):
    """
    Case-insensitive substring match of `keyword` against each project's
    title, author and tags. Input order is kept; an empty keyword keeps all.
    """
    keyword = (keyword or "").lower()
    matches = [
        proj for proj in projects_data
        if keyword in proj.title.lower()
        or keyword in proj.author.lower()
        or any(keyword in tag.lower() for tag in proj.tags)
    ]
    logger.debug("search_projects(%r): %d of %d matched",
                 keyword, len(matches), len(projects_data))
    return matches
