"""Tests for the permission catalog and pattern helpers."""

from __future__ import annotations

from permkit import WILDCARD, PatternKind, PermissionCatalog, Permissions, as_names


def _catalog() -> PermissionCatalog:
    return PermissionCatalog(
        {
            "posts": ["create", "read", "update", "delete"],
            "users": ["create", "read", "update", "delete"],
            "comments": ["create", "read", "delete"],
        }
    )


class TestPermissionsBuilders:
    """Tests for Permissions string builders."""

    def test_of(self) -> None:
        """Resource and action are joined with the separator."""
        assert Permissions.of("posts", "read") == "posts:read"

    def test_resource_wildcard(self) -> None:
        """The resource wildcard ends in ":*"."""
        assert Permissions.resource_wildcard("posts") == "posts:*"

    def test_split_on_first_separator(self) -> None:
        """Actions may contain the separator."""
        assert Permissions.split("tools:register:acme") == ("tools", "register:acme")

    def test_split_without_separator(self) -> None:
        """A string without a separator has an empty action."""
        assert Permissions.split("posts") == ("posts", "")

    def test_kind(self) -> None:
        """Each pattern form is classified."""
        assert Permissions.kind(WILDCARD) == PatternKind.GLOBAL
        assert Permissions.kind("posts:*") == PatternKind.RESOURCE
        assert Permissions.kind("posts:read") == PatternKind.LITERAL


class TestCatalog:
    """Tests for PermissionCatalog contents."""

    def test_contains_all_resource_action_pairs(self) -> None:
        """Every declared resource/action pair is in the catalog."""
        catalog = _catalog()
        for perm in (
            "posts:create",
            "posts:read",
            "posts:update",
            "posts:delete",
            "users:create",
            "users:read",
            "users:update",
            "users:delete",
            "comments:create",
            "comments:read",
            "comments:delete",
        ):
            assert perm in catalog

    def test_total_count(self) -> None:
        """4 posts + 4 users + 3 comments = 11."""
        assert len(_catalog()) == 11

    def test_does_not_contain_invalid_permissions(self) -> None:
        """Unknown resources and actions are not in the catalog."""
        catalog = _catalog()
        assert "invalid:action" not in catalog
        assert "posts:invalid" not in catalog

    def test_duplicate_actions_collapse(self) -> None:
        """Repeated actions yield one permission."""
        catalog = PermissionCatalog({"posts": ["read", "read"]})
        assert catalog.permissions == frozenset({"posts:read"})

    def test_resources_and_actions(self) -> None:
        """Resources and per-resource actions can be listed."""
        catalog = _catalog()
        assert catalog.resources == frozenset({"posts", "users", "comments"})
        assert catalog.actions_for("comments") == frozenset({"create", "read", "delete"})
        assert catalog.actions_for("ghost") == frozenset()

    def test_empty_catalog(self) -> None:
        """No resources gives an empty catalog, even for "*"."""
        catalog = PermissionCatalog({})
        assert len(catalog) == 0
        assert catalog.expand("*") == frozenset()


class TestExpand:
    """Tests for wildcard expansion."""

    def test_global_wildcard_is_whole_catalog(self) -> None:
        """The global wildcard expands to every catalog entry."""
        catalog = _catalog()
        assert catalog.expand("*") == catalog.permissions

    def test_resource_wildcard(self) -> None:
        """A resource wildcard expands to every action of that resource."""
        assert _catalog().expand("posts:*") == frozenset(
            {"posts:create", "posts:read", "posts:update", "posts:delete"}
        )

    def test_unknown_resource_wildcard_is_empty(self) -> None:
        """A wildcard over an undeclared resource expands to nothing."""
        assert _catalog().expand("ghost:*") == frozenset()

    def test_literal_is_not_validated(self) -> None:
        """Literal patterns outside the catalog still expand to themselves."""
        assert _catalog().expand("x:y") == frozenset({"x:y"})

    def test_literal_in_catalog(self) -> None:
        """A catalog literal expands to itself."""
        assert _catalog().expand("posts:read") == frozenset({"posts:read"})


class TestAsNames:
    """Tests for role/permission argument normalization."""

    def test_bare_string_is_single_name(self) -> None:
        """A string becomes a one-element tuple."""
        assert as_names("admin") == ("admin",)
        assert as_names("posts:read") == ("posts:read",)

    def test_iterables_keep_order(self) -> None:
        """Lists, sets and generators are materialized in iteration order."""
        assert as_names(["editor", "admin"]) == ("editor", "admin")
        assert as_names(r for r in ("a", "b")) == ("a", "b")
        assert as_names(frozenset({"x"})) == ("x",)

    def test_empty(self) -> None:
        """Empty input stays empty, and the empty string is still one name."""
        assert as_names([]) == ()
        assert as_names("") == ("",)
