"""
Mock TMDB API responses for testing.

Contains realistic responses from the TMDB API for details, videos, seasons,
alternative titles and genre lists.
These fixtures are used with respx to mock httpx calls in tests.
"""

# GET /movie/603?language=en&append_to_response=videos
TMDB_MOVIE_DETAILS_RESPONSE = {
    "id": 603,
    "imdb_id": "tt0133093",
    "title": "The Matrix",
    "original_title": "The Matrix",
    "overview": "Set in the 22nd century, The Matrix tells the story of a computer hacker...",
    "release_date": "1999-03-30",
    "vote_average": 8.2,
    "backdrop_path": "/fNG7i7RqMErkcqhohV2a6cV1Ehy.jpg",
    "poster_path": "/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg",
    "homepage": "http://www.warnerbros.com/matrix",
    "genres": [
        {"id": 28, "name": "Action"},
        {"id": 878, "name": "Science Fiction"},
    ],
    "videos": {
        "results": [
            {"key": "vKQi3bBA1y8", "site": "YouTube", "type": "Trailer"},
            {"key": "m8e-FF8MsqU", "site": "YouTube", "type": "Teaser"},
        ]
    },
}

# GET /movie/603?... when no trailer exists in the configured language
TMDB_MOVIE_DETAILS_NO_VIDEOS_RESPONSE = {
    **TMDB_MOVIE_DETAILS_RESPONSE,
    "videos": {"results": []},
}

# GET /tv/1399?language=en&append_to_response=videos,external_ids
TMDB_TV_DETAILS_RESPONSE = {
    "id": 1399,
    "name": "Game of Thrones",
    "original_name": "Game of Thrones",
    "overview": "Seven noble families fight for control of the mythical land of Westeros.",
    "first_air_date": "2011-04-17",
    "vote_average": 8.4,
    "backdrop_path": "/2OMB0ynKlyIenMJWI2Dy9IWT4c.jpg",
    "poster_path": "/1XS1oqL89opfnbLl8WnZY1O1uJx.jpg",
    "homepage": "",
    "genres": [
        {"id": 10765, "name": "Sci-Fi & Fantasy"},
        {"id": 18, "name": "Drama"},
    ],
    "external_ids": {"imdb_id": "tt0944947", "tvdb_id": 121361},
    "videos": {"results": [{"key": "KPLWWIOCOOQ", "site": "YouTube"}]},
    "seasons": [
        {"season_number": 0, "id": 3627, "name": "Specials"},
        {"season_number": 1, "id": 3624, "name": "Season 1"},
        {"season_number": 2, "id": 3625, "name": "Season 2"},
    ],
}

# GET /tv/1399/season/1
TMDB_TV_SEASON_1_RESPONSE = {
    "id": 3624,
    "season_number": 1,
    "episodes": [
        {
            "id": 63056,
            "season_number": 1,
            "episode_number": 1,
            "name": "Winter Is Coming",
            "air_date": "2011-04-17",
        },
        {
            "id": 63057,
            "season_number": 1,
            "episode_number": 2,
            "name": "The Kingsroad",
            "air_date": "2011-04-24",
        },
    ],
}

# GET /tv/1399/season/2
TMDB_TV_SEASON_2_RESPONSE = {
    "id": 3625,
    "season_number": 2,
    "episodes": [
        {
            "id": 974430,
            "season_number": 2,
            "episode_number": 1,
            "name": "The North Remembers",
            "air_date": "2012-04-01",
        },
    ],
}

# GET /movie/603/videos?language=en
TMDB_VIDEOS_RESPONSE = {
    "id": 603,
    "results": [
        {"key": "vKQi3bBA1y8", "site": "YouTube", "type": "Trailer"},
    ],
}

# GET /movie/603/alternative_titles
TMDB_MOVIE_ALTERNATIVE_TITLES_RESPONSE = {
    "id": 603,
    "titles": [
        {"iso_3166_1": "FR", "title": "Matrix", "type": ""},
        {"iso_3166_1": "DE", "title": "Matrix", "type": ""},
        {"iso_3166_1": "JP", "title": "\u200eマトリックス", "type": ""},
    ],
}

# GET /tv/1399/alternative_titles
TMDB_TV_ALTERNATIVE_TITLES_RESPONSE = {
    "id": 1399,
    "results": [
        {"iso_3166_1": "FR", "title": "Le Trône de fer", "type": ""},
    ],
}

# GET /genre/movie/list
TMDB_MOVIE_GENRES_RESPONSE = {
    "genres": [
        {"id": 28, "name": "Action"},
        {"id": 18, "name": "Drama"},
        {"id": 878, "name": "Science Fiction"},
    ]
}

# GET /genre/tv/list
TMDB_TV_GENRES_RESPONSE = {
    "genres": [
        {"id": 18, "name": "Drama"},
        {"id": 10765, "name": "Sci-Fi & Fantasy"},
    ]
}
