"""
Movie lookup tools backed by an injectable in-memory catalog.
"""

from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, Field

from ..core.tool_registry import ToolRegistryMixin


class Movie(BaseModel):
    genre: str
    rating: float
    year: int
    director: str
    description: str


class Actor(BaseModel):
    movies: List[str]
    awards: List[str]


class MovieCatalog:
    """Mock movie database. Pass your own dictionaries to override the samples."""

    def __init__(
        self,
        movies: Optional[Dict[str, Movie]] = None,
        recommendations: Optional[Dict[str, List[str]]] = None,
        actors: Optional[Dict[str, Actor]] = None,
    ):
        self.movies = movies if movies is not None else {
            "The Matrix": Movie(
                genre="Action",
                rating=4.5,
                year=1999,
                director="Lana Wachowski",
                description="A computer hacker learns about the true nature of reality",
            ),
            "Inception": Movie(
                genre="Sci-Fi",
                rating=4.8,
                year=2010,
                director="Christopher Nolan",
                description="A thief who steals corporate secrets through dream-sharing technology",
            ),
        }
        self.recommendations = recommendations if recommendations is not None else {
            "Action": ["Die Hard", "Mad Max: Fury Road", "John Wick"],
            "Sci-Fi": ["Blade Runner", "Interstellar", "The Martian"],
            "Drama": ["The Godfather", "Shawshank Redemption", "Forrest Gump"],
        }
        self.actors = actors if actors is not None else {
            "Keanu Reeves": Actor(
                movies=["The Matrix", "John Wick", "Speed"],
                awards=["MTV Movie Award", "People's Choice Award"],
            ),
            "Leonardo DiCaprio": Actor(
                movies=["Inception", "Titanic", "The Revenant"],
                awards=["Academy Award", "Golden Globe"],
            ),
        }


class MovieTools(ToolRegistryMixin):
    """Movie information tools. Unknown titles and names are answered, not raised."""

    def __init__(self, catalog: Optional[MovieCatalog] = None):
        self.catalog = catalog or MovieCatalog()
        ToolRegistryMixin.__init__(self)

    @ToolRegistryMixin.tool(name="getMovieInfo")
    def get_movie_info(
        self,
        title: Annotated[str, Field(description="The title of the movie")]
    ) -> str:
        """Get information about a movie"""
        movie = self.catalog.movies.get(title)
        if movie is None:
            return f"Sorry, I don't have information about {title}"

        return (
            f"Movie: {title}\n"
            f"Genre: {movie.genre}\n"
            f"Rating: {movie.rating}/5\n"
            f"Year: {movie.year}\n"
            f"Director: {movie.director}\n"
            f"Description: {movie.description}"
        )

    @ToolRegistryMixin.tool(name="getMovieRecommendations")
    def get_movie_recommendations(
        self,
        genre: Annotated[str, Field(description="The genre to get recommendations for")]
    ) -> str:
        """Get movie recommendations by genre"""
        movies = self.catalog.recommendations.get(genre) or ["No recommendations found"]
        return f"Recommended {genre} movies:\n" + "\n".join(movies)

    @ToolRegistryMixin.tool(name="getActorInfo")
    def get_actor_info(
        self,
        name: Annotated[str, Field(description="The name of the actor")]
    ) -> str:
        """Get information about an actor"""
        actor = self.catalog.actors.get(name)
        if actor is None:
            return f"Sorry, I don't have information about {name}"

        return (
            f"Actor: {name}\n"
            f"Notable Movies: {', '.join(actor.movies)}\n"
            f"Awards: {', '.join(actor.awards)}"
        )
