"""
Tests des repositories SQLModel.

Verifie les cles naturelles (saison, episode, fichier video), l'insertion
idempotente des tags et personnes, le remplacement des lots de candidats
et l'ordre des fournisseurs actives.
"""

from datetime import timezone

import pytest
from sqlalchemy import event

from seriesync.core.entities.media import Episode, Person, Season, Show, Tag, VideoFile
from seriesync.core.entities.search import SearchBatch, SearchCandidate, SelectionResult
from seriesync.core.value_objects import MediaType, UpdateMode
from seriesync.infrastructure.persistence.models import EpisodeModel
from seriesync.infrastructure.persistence.repositories import (
    SQLModelEpisodeRepository,
    SQLModelPersonRepository,
    SQLModelProviderConfigRepository,
    SQLModelSearchResultRepository,
    SQLModelSeasonRepository,
    SQLModelShowRepository,
    SQLModelTagRepository,
    SQLModelVideoFileRepository,
)


@pytest.fixture
def show(session, library) -> Show:
    return SQLModelShowRepository(session).save(
        Show(title="Lost", library_id=library.id, path="Lost")
    )


class TestShowRepository:
    def test_save_then_update(self, session, show):
        repo = SQLModelShowRepository(session)
        show.overview = "Des naufrages"
        show.update_mode = UpdateMode.UPDATED

        saved = repo.save(show)

        assert saved.id == show.id
        reloaded = repo.get_by_id(show.id)
        assert reloaded.overview == "Des naufrages"
        assert reloaded.update_mode == UpdateMode.UPDATED

    def test_get_unknown(self, session):
        assert SQLModelShowRepository(session).get_by_id(404) is None

    def test_set_binding_unknown_show(self, session):
        with pytest.raises(LookupError):
            SQLModelShowRepository(session).set_binding(
                404, SelectionResult("fake", "1"), UpdateMode.FORCE
            )


class TestSeasonAndEpisode:
    def test_season_is_unique_per_show_and_number(self, session, show):
        repo = SQLModelSeasonRepository(session)
        first = repo.save(Season(show_id=show.id, season_number=1, title="Season 1"))

        second = repo.save(Season(show_id=show.id, season_number=1, title="Saison 1"))

        assert second.id == first.id
        assert [s.title for s in repo.list_by_show(show.id)] == ["Saison 1"]

    def test_episode_is_unique_per_show_season_number(self, session, show):
        repo = SQLModelEpisodeRepository(session)
        first = repo.save(Episode(show_id=show.id, season_number=1, episode_number=2, title="A"))

        second = repo.save(Episode(show_id=show.id, season_number=1, episode_number=2, title="B"))

        assert second.id == first.id
        assert len(repo.list_by_show(show.id)) == 1

    def test_episodes_ordered_by_season_then_number(self, session, show):
        repo = SQLModelEpisodeRepository(session)
        for season, number in [(2, 1), (1, 3), (1, 1)]:
            repo.save(Episode(show_id=show.id, season_number=season, episode_number=number))

        listed = [(e.season_number, e.episode_number) for e in repo.list_by_show(show.id)]

        assert listed == [(1, 1), (1, 3), (2, 1)]

    def test_get_episode_by_number(self, session, show):
        repo = SQLModelEpisodeRepository(session)
        saved = repo.save(Episode(show_id=show.id, season_number=1, episode_number=4, title="Walkabout"))

        assert repo.get_by_number(show.id, 1, 4).id == saved.id
        assert repo.get_by_number(show.id, 1, 5) is None

    def test_reset_all_for_show(self, session, show, library):
        repo = SQLModelSeasonRepository(session)
        other = SQLModelShowRepository(session).save(
            Show(title="Heroes", library_id=library.id, path="Heroes")
        )
        repo.save(Season(show_id=show.id, season_number=1, provider_id="x", update_mode=UpdateMode.UPDATED))
        repo.save(Season(show_id=other.id, season_number=1, provider_id="y", update_mode=UpdateMode.UPDATED))

        assert repo.reset_all_for_show(show.id, UpdateMode.FORCE) == 1

        assert repo.list_by_show(show.id)[0].update_mode == UpdateMode.FORCE
        assert repo.list_by_show(other.id)[0].provider_id == "y"


class TestVideoFileRepository:
    def test_add_returns_existing_for_same_path(self, session, library):
        repo = SQLModelVideoFileRepository(session)
        first = repo.add(VideoFile(library_id=library.id, path="Lost/Lost.S01E01.mkv", media_id=1))

        second = repo.add(VideoFile(library_id=library.id, path="Lost/Lost.S01E01.mkv", media_id=2))

        assert second.id == first.id
        assert second.media_id == 1

    def test_get_by_path_and_touch(self, session, library):
        repo = SQLModelVideoFileRepository(session)
        added = repo.add(VideoFile(library_id=library.id, path="Lost/a.mkv", media_id=1, size_bytes=10))

        repo.touch(added.id, 42)

        assert repo.get_by_path(library.id, "Lost/a.mkv").size_bytes == 42
        assert repo.get_by_path(library.id, "Lost/b.mkv") is None
        assert [f.id for f in repo.list_by_media(MediaType.TVS_EPISODE, 1)] == [added.id]


class TestTagAndPerson:
    def test_tag_insert_or_return(self, session):
        repo = SQLModelTagRepository(session)
        first = repo.add(Tag(name="genre", value="Drama"))

        assert repo.add(Tag(name="genre", value="Drama")).id == first.id
        assert repo.add(Tag(name="genre", value="Comedy")).id != first.id

    def test_links_are_idempotent(self, session, show):
        repo = SQLModelTagRepository(session)
        tag = repo.add(Tag(name="genre", value="Drama"))

        repo.add_link(tag.id, MediaType.TVS, show.id)
        repo.add_link(tag.id, MediaType.TVS, show.id)

        assert len(repo.list_for_media(MediaType.TVS, show.id)) == 1
        assert repo.delete_links(MediaType.TVS, show.id) == 1
        assert repo.list_for_media(MediaType.TVS, show.id) == []

    def test_person_insert_or_return(self, session, show):
        repo = SQLModelPersonRepository(session)
        person = repo.add(Person(name="Evangeline Lilly"))

        assert repo.add(Person(name="Evangeline Lilly")).id == person.id
        repo.add_link(person.id, MediaType.TVS, show.id)
        assert [p.name for p in repo.list_for_media(MediaType.TVS, show.id)] == ["Evangeline Lilly"]
        assert repo.delete_links(MediaType.TVS, show.id) == 1


class TestSearchResultRepository:
    def _batch(self, media_id: int, *ids: str) -> SearchBatch:
        return SearchBatch(
            media_type=MediaType.TVS.value,
            media_id=media_id,
            name="Lost",
            candidates=[
                SearchCandidate(f"Lost {i}", "fake", i, premiered=1096588800) for i in ids
            ],
        )

    def test_replace_keeps_single_batch(self, session, show):
        repo = SQLModelSearchResultRepository(session)
        repo.replace(self._batch(show.id, "1", "2"))

        repo.replace(self._batch(show.id, "3"))

        batch = repo.get(MediaType.TVS, show.id)
        assert [c.provider_id for c in batch.candidates] == ["3"]
        assert batch.candidates[0].premiere_year == 2004
        assert len(repo.list_pending(MediaType.TVS)) == 1

    def test_delete(self, session, show):
        repo = SQLModelSearchResultRepository(session)
        repo.replace(self._batch(show.id, "1"))

        assert repo.delete(MediaType.TVS, show.id) is True
        assert repo.delete(MediaType.TVS, show.id) is False
        assert repo.get(MediaType.TVS, show.id) is None


class TestProviderConfigRepository:
    def test_list_enabled_by_priority(self, session):
        repo = SQLModelProviderConfigRepository(session)
        repo.save("tvdb", MediaType.TVS, {"apikey": "a"}, priority=2)
        repo.save("tmdb", MediaType.TVS, {"language": "fr"}, priority=1)
        repo.save("omdb", MediaType.TVS, priority=0, enabled=False)
        repo.save("imdb", MediaType.MOVIE, priority=0)

        names, settings = repo.list_enabled(MediaType.TVS)

        assert names == ["tmdb", "tvdb"]
        assert settings == {"tmdb": {"language": "fr"}, "tvdb": {"apikey": "a"}}

    def test_save_updates_existing(self, session):
        repo = SQLModelProviderConfigRepository(session)
        repo.save("tvdb", MediaType.TVS, {"apikey": "a"})

        repo.save("tvdb", MediaType.TVS, {"apikey": "b"}, enabled=False)

        assert repo.list_enabled(MediaType.TVS) == ([], {})


class TestTimestamps:
    def test_model_defaults_are_timezone_aware(self):
        model = EpisodeModel(show_id=1, season_number=1, episode_number=1)

        assert model.created_at.tzinfo is timezone.utc
        assert model.updated_at.tzinfo is timezone.utc

    def test_repository_writes_timezone_aware_updated_at(self, session, show):
        repo = SQLModelEpisodeRepository(session)
        repo.save(Episode(show_id=show.id, season_number=1, episode_number=1))
        stamps = []

        def record(flushing, flush_context, instances):
            stamps.extend(obj.updated_at for obj in flushing.dirty)

        event.listen(session, "before_flush", record)
        try:
            repo.reset_all_for_show(show.id, UpdateMode.FORCE)
        finally:
            event.remove(session, "before_flush", record)

        assert stamps
        assert all(stamp.tzinfo is timezone.utc for stamp in stamps)
