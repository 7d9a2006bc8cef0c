"""
Tests for candidate collection, commune deduplication and ordering.
"""
from app.locations.models import ResultKind, ScoredCandidate, SearchResult
from app.locations.normalizer import collation_key, normalize
from app.locations.ranking import TypePriority, collect, dedupe_communes, rank

from tests.conftest import make_city, make_commune, make_neighborhood


def candidate(id, name, kind, score, commune_name=None):
    result = SearchResult(id=id, name=name, kind=kind, commune_name=commune_name)
    return ScoredCandidate(result=result, score=score)


class TestCollect:
    def test_city_candidate(self):
        cities = [make_city("c1", "Abidjan", "Lagunes")]
        found = collect("abidjan", cities, [])
        assert len(found) == 1
        assert found[0].result.kind == ResultKind.CITY
        assert found[0].result.region == "Lagunes"
        assert found[0].score == 110

    def test_non_matching_city_is_dropped_despite_bonus(self):
        assert collect("zzzzz", [make_city("c1", "Abidjan")], []) == []

    def test_city_matching_by_region(self):
        found = collect("lagunes", [make_city("c1", "Abidjan", "Lagunes")], [])
        assert [c.score for c in found] == [50]

    def test_place_kinds(self):
        places = [
            make_commune("p1", "Cocody"),
            make_neighborhood("p2", "Cocody Centre", "Cocody"),
        ]
        found = collect("cocody", [], places)
        kinds = sorted((c.result.kind.value, c.result.name) for c in found)
        assert ("neighborhood", "Cocody Centre") in kinds
        assert ("commune", "Cocody") in kinds

    def test_commune_surfaces_from_its_neighborhoods(self):
        places = [make_neighborhood("p1", "Niangon", "Yopougon", parent_city_id="c1")]
        found = collect("yopougon", [], places)
        communes = [c for c in found if c.result.kind == ResultKind.COMMUNE]
        assert len(communes) == 1
        assert communes[0].result.name == "Yopougon"
        assert communes[0].result.parent_city_id == "c1"
        assert communes[0].score == 100

    def test_inputs_are_not_modified(self):
        cities = [make_city("c1", "Abidjan")]
        places = [make_commune("p1", "Cocody")]
        collect("co", cities, places)
        assert cities[0].name == "Abidjan"
        assert places[0].commune_name == "Cocody"


class TestDedupeCommunes:
    def test_keeps_highest_score(self):
        candidates = [
            candidate("a", "Yopougon", ResultKind.COMMUNE, 60, "Yopougon"),
            candidate("b", "Yopougon", ResultKind.COMMUNE, 100, "Yopougon"),
        ]
        deduped = dedupe_communes(candidates)
        assert len(deduped) == 1
        assert deduped[0].result.id == "b"

    def test_tie_keeps_first_seen(self):
        candidates = [
            candidate("a", "Yopougon", ResultKind.COMMUNE, 100, "Yopougon"),
            candidate("b", "Yopougon", ResultKind.COMMUNE, 100, "Yopougon"),
        ]
        assert [c.result.id for c in dedupe_communes(candidates)] == ["a"]

    def test_groups_by_normalized_name(self):
        candidates = [
            candidate("a", "Adjamé", ResultKind.COMMUNE, 80, "Adjamé"),
            candidate("b", "ADJAME", ResultKind.COMMUNE, 90, "ADJAME"),
        ]
        deduped = dedupe_communes(candidates)
        assert [c.result.id for c in deduped] == ["b"]

    def test_other_kinds_untouched(self):
        candidates = [
            candidate("c", "Abidjan", ResultKind.CITY, 110),
            candidate("n1", "Niangon", ResultKind.NEIGHBORHOOD, 40, "Yopougon"),
            candidate("n2", "Niangon", ResultKind.NEIGHBORHOOD, 40, "Yopougon"),
            candidate("y", "Yopougon", ResultKind.COMMUNE, 100, "Yopougon"),
        ]
        deduped = dedupe_communes(candidates)
        assert len([c for c in deduped if c.result.kind != ResultKind.COMMUNE]) == 3

    def test_one_commune_per_name(self, places):
        deduped = dedupe_communes(collect("yopougon", [], places))
        names = [normalize(c.result.commune_name) for c in deduped if c.result.kind == ResultKind.COMMUNE]
        assert len(names) == len(set(names))


class TestRank:
    def test_score_descending(self):
        results = rank([
            candidate("a", "A", ResultKind.NEIGHBORHOOD, 40),
            candidate("b", "B", ResultKind.NEIGHBORHOOD, 80),
        ])
        assert [r.id for r in results] == ["b", "a"]

    def test_general_priority(self):
        results = rank([
            candidate("n", "Same", ResultKind.NEIGHBORHOOD, 80),
            candidate("m", "Same", ResultKind.COMMUNE, 80),
            candidate("c", "Same", ResultKind.CITY, 80),
        ])
        assert [r.kind for r in results] == [ResultKind.CITY, ResultKind.COMMUNE, ResultKind.NEIGHBORHOOD]

    def test_commune_first_priority(self):
        results = rank([
            candidate("c", "Same", ResultKind.CITY, 80),
            candidate("n", "Same", ResultKind.NEIGHBORHOOD, 80),
            candidate("m", "Same", ResultKind.COMMUNE, 80),
        ], priority=TypePriority.COMMUNE_FIRST)
        assert [r.kind for r in results] == [ResultKind.COMMUNE, ResultKind.NEIGHBORHOOD, ResultKind.CITY]

    def test_priority_accepts_plain_value(self):
        results = rank([
            candidate("c", "Same", ResultKind.CITY, 80),
            candidate("m", "Same", ResultKind.COMMUNE, 80),
        ], priority="commune_first")
        assert results[0].kind == ResultKind.COMMUNE

    def test_name_tie_break_is_accent_aware(self):
        results = rank([
            candidate("z", "Zone 4", ResultKind.NEIGHBORHOOD, 40),
            candidate("e", "Élysée", ResultKind.NEIGHBORHOOD, 40),
            candidate("a", "Angré", ResultKind.NEIGHBORHOOD, 40),
        ])
        assert [r.name for r in results] == ["Angré", "Élysée", "Zone 4"]

    def test_stable_on_full_tie(self):
        results = rank([
            candidate("first", "Riviera", ResultKind.NEIGHBORHOOD, 40),
            candidate("second", "Riviera", ResultKind.NEIGHBORHOOD, 40),
        ])
        assert [r.id for r in results] == ["first", "second"]

    def test_limit(self):
        candidates = [candidate(str(i), f"N{i}", ResultKind.NEIGHBORHOOD, i) for i in range(30)]
        assert len(rank(candidates, limit=15)) == 15
        assert rank(candidates, limit=0) == []
        assert len(rank(candidates)) == 30

    def test_adjacent_pairs_are_ordered(self, cities, places):
        order = {ResultKind.CITY: 0, ResultKind.COMMUNE: 1, ResultKind.NEIGHBORHOOD: 2}
        scored = dedupe_communes(collect("an", cities, places))
        by_id = {(c.result.id, c.result.kind): c.score for c in scored}
        results = rank(scored)
        for a, b in zip(results, results[1:]):
            score_a, score_b = by_id[a.id, a.kind], by_id[b.id, b.kind]
            assert score_a >= score_b
            if score_a == score_b:
                assert order[a.kind] <= order[b.kind]
                if a.kind == b.kind:
                    assert collation_key(a.name) <= collation_key(b.name)
