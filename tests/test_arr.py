from simple_utilities import Arr


def test_where_with_operator(users):
    adults = Arr.where(users, "age", ">=", 18)

    assert [user["age"] for user in adults] == [25, 40]


def test_where_two_argument_form_means_equality(users):
    assert Arr.where(users, "role", "admin") == [users[1]]


def test_where_with_callback_on_dict_keeps_keys():
    prices = {"apple": 3, "pear": 5, "plum": 1}

    assert Arr.where(prices, lambda value, key: value > 2) == {"apple": 3, "pear": 5}


def test_where_never_matches_none():
    items = [{"score": None}, {"score": 0}]

    assert Arr.where(items, "score", "!=", 5) == [{"score": 0}]


def test_where_strict_operators():
    items = [{"v": 1}, {"v": "1"}]

    assert Arr.where(items, "v", "===", 1) == [{"v": 1}]
    assert Arr.where(items, "v", "!==", 1) == [{"v": "1"}]


def test_where_incomparable_types_do_not_raise():
    assert Arr.where([{"v": "a"}], "v", ">", 1) == []


def test_contains(users):
    assert Arr.contains(users, "role", "editor")
    assert not Arr.contains(users, "role", "owner")
    assert Arr.contains([1, 2, 3], 2)
    assert Arr.contains(users, lambda user, key: user["age"] > 30)


def test_where_in_and_where_not(users):
    assert [u["role"] for u in Arr.where_in(users, "role", ["guest", "editor"])] == ["guest", "editor"]
    assert [u["role"] for u in Arr.where_not(users, "role", "guest")] == ["admin", "editor"]


def test_first_and_last():
    numbers = [1, 5, 10, 15]

    assert Arr.first(numbers) == 1
    assert Arr.first(numbers, lambda value, key: value > 6) == 10
    assert Arr.first([], default=lambda: "fallback") == "fallback"
    assert Arr.last(numbers) == 15
    assert Arr.last(numbers, lambda value, key: value < 10) == 5
    assert Arr.last([], default="none") == "none"


def test_first_where(users):
    assert Arr.first_where(users, "age", ">", 20) == users[1]
    assert Arr.first_where([{"active": False}, {"active": True, "id": 2}], "active") == {"active": True, "id": 2}


def test_filter_without_callback_drops_falsy():
    assert Arr.filter([0, 1, "", "a", None]) == [1, "a"]


def test_map_passes_key():
    assert Arr.map({"a": 1, "b": 2}, lambda value, key: f"{key}{value}") == {"a": "a1", "b": "b2"}


def test_each_visits_every_item():
    seen = []
    Arr.each(["x", "y"], lambda value, key: seen.append((key, value)))

    assert seen == [(0, "x"), (1, "y")]


def test_data_get():
    data = {"user": {"profile": {"name": "Jane"}}}

    assert Arr.data_get(data, "user.profile.name") == "Jane"
    assert Arr.data_get(data, "user.email", "n/a") == "n/a"
    assert Arr.data_get(None, "anything", lambda: 42) == 42
