"""
Constantes globales pour Homeflix.

Ce module contient les constantes utilisees dans l'application:
- Mapping des IDs de genre TMDB (films et series) vers noms de genre
- Repertoires et prefixe URL des images telechargees
- Type MIME des flux video
"""

# Mapping des IDs de genre TMDB vers noms (films + series TV).
# Vocabulaire ferme : un ID absent de cette table est ignore.
GENRE_MAP: dict[int, str] = {
    16: "Animation",
    18: "Drama",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    10751: "Family",
    10759: "Action & Adventure",
    10762: "Kids",
    10763: "News",
    10764: "Reality",
    10765: "Sci-Fi & Fantasy",
    10766: "Soap",
    10767: "Talk",
    10768: "War & Politics",
    28: "Action",
    12: "Adventure",
    14: "Fantasy",
    27: "Horror",
    36: "History",
    53: "Thriller",
    10749: "Romance",
    10402: "Music",
    9648: "Mystery",
    878: "Science Fiction",
    37: "Western",
    10770: "TV Movie",
}

# Separateur des genres stockes en base ("Action, Drama")
GENRE_SEPARATOR = ", "

# Sous-repertoires des images dans assets_dir
POSTERS_DIR = "posters"
BACKDROPS_DIR = "backdrops"

# Prefixe URL sous lequel assets_dir est servi (StaticFiles)
ASSETS_URL_PREFIX = "/data"

# Type de contenu fixe des flux video
VIDEO_CONTENT_TYPE = "video/mp4"

# Taille des blocs lus pour le streaming (1 MB)
STREAM_CHUNK_SIZE: int = 1024 * 1024

# Marqueur de type stocke sur les lignes series
SERIES_MEDIA_TYPE = "series"

# Type retourne par la recherche pour les series regroupees
SEARCH_SERIES_MEDIA_TYPE = "tvSeries"
