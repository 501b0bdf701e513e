"""Persisted store keys."""

RSS_FEEDS = "rssFeeds"
SELECTED_FEEDS = "selectedFeeds"
REFRESH_INTERVAL_MIN = "refreshIntervalMin"
CACHED_ARTICLES = "cachedArticles"
LAST_UPDATED_AT = "lastUpdatedAt"
IS_OFFLINE = "isOffline"
