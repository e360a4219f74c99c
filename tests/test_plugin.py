# ==============================================
# Tests for the taggable plugin (tag / untag / hook)
# ==============================================

from datetime import datetime

import pytest
from bson import ObjectId

from taggable import FieldKind, Schema, TaggableConfig, TaggableOptions, get_config, model, taggable


class TestAttach:
    def test_adds_tags_path(self, build_model):
        User = build_model()
        tags = User.schema.path("tags")
        assert tags is not None
        assert tags.kind is FieldKind.ARRAY
        assert tags.options["duplicate"] is False
        assert tags.options["searchable"] is True
        assert tags.options["index"] is True
        assert tags.options["hide"] is True
        assert tags.options["exportable"] is False

    def test_adds_tags_path_with_options(self, build_model):
        User = build_model(path="keywords", index="text")
        keywords = User.schema.path("keywords")
        assert keywords is not None
        assert keywords.options["searchable"] is True
        assert keywords.options["index"] == "text"
        assert User.TAGGABLE_PATH == "keywords"

    def test_collects_taggable_paths(self, build_model):
        User = build_model({"name": {"type": str, "taggable": True}})
        assert "name" in User.TAGGABLE_FIELDS

    def test_does_not_collect_non_taggable_paths(self, build_model):
        User = build_model({"name": str})
        assert "name" not in User.TAGGABLE_FIELDS

    def test_unknown_option_is_rejected(self, config):
        with pytest.raises(ValueError):
            taggable(Schema({"name": str}), config=config, colour="red")

    def test_plugin_via_schema(self, config):
        schema = Schema({"name": str})
        schema.plugin(taggable, config=config, blacklist="js")
        User = model("User", schema)
        assert User.TAGGABLE_OPTIONS.blacklist == ("js",)

    def test_options_object(self):
        options = TaggableOptions.build({"path": "keywords"}, fresh=True)
        assert options.path == "keywords"
        assert options.fresh is True
        assert options.hook == "validate"


class TestTag:
    def test_tag(self, build_model):
        user = build_model()()
        user.tag("js", "nodejs")
        assert "js" in user.tags
        assert "nodejs" in user.tags

    def test_tag_splits_phrases(self, build_model):
        user = build_model()()
        user.tag("js ninja", "nodejs")
        assert user.tags == ["js", "ninja", "nodejs"]

    def test_tag_removes_stopwords(self, build_model):
        user = build_model()()
        user.tag("js and ninja", "nodejs with express")
        assert user.tags == ["js", "ninja", "nodejs", "express"]

    def test_tag_removes_other_language_stopwords(self, build_model):
        user = build_model()()
        user.tag("js na ninja", "nodejs na express")
        assert "na" not in user.tags
        assert user.tags == ["js", "ninja", "nodejs", "express"]

    def test_tag_lowercases(self, build_model):
        User = build_model()
        upper, lower = User(), User()
        upper.tag("JS", "NODEJS")
        lower.tag("js", "nodejs")
        assert upper.tags == lower.tags == ["js", "nodejs"]

    def test_tag_returns_tags(self, build_model):
        assert build_model()().tag("JS") == ["js"]

    def test_tag_nothing_gives_empty_tags(self, build_model):
        user = build_model()()
        user.tag()
        assert user.tags == []

    def test_tag_is_idempotent(self, build_model):
        User = build_model({"name": {"type": str, "taggable": True}})
        user = User(name="John Boe")
        user.tag("nodejs")
        first = list(user.tags)
        user.tag()
        assert user.tags == first

    def test_tag_accumulates_by_default(self, build_model):
        user = build_model()()
        user.tag("js")
        user.tag("nodejs")
        assert user.tags == ["js", "nodejs"]

    def test_tag_fresh_discards_previous_tags(self, build_model):
        user = build_model(fresh=True)()
        user.tag("js")
        user.tag("nodejs")
        assert user.tags == ["nodejs"]

    def test_existing_raw_tags_are_renormalized(self, build_model):
        user = build_model()()
        user.tags = ["JS Ninja", "and"]
        user.tag()
        assert user.tags == ["js", "ninja"]


class TestBlacklist:
    def test_tag_without_blacklist(self, build_model):
        user = build_model(blacklist=["js"])()
        user.tag("JS", "NODEJS")
        assert user.tags == ["nodejs"]

    def test_tag_without_blacklist_from_config(self):
        schema = Schema({"name": str})
        taggable(schema, config=TaggableConfig(blacklist=("js",)))
        user = model("User", schema)()
        user.tag("JS", "NODEJS")
        assert user.tags == ["nodejs"]

    def test_tag_without_blacklist_from_env(self, monkeypatch):
        monkeypatch.setenv("TAGGABLE_BLACKLIST", "js")
        get_config(reload=True)
        schema = Schema({"name": str})
        schema.plugin(taggable)
        user = model("User", schema)()
        user.tag("JS", "NODEJS")
        assert user.tags == ["nodejs"]

    def test_env_and_option_blacklists_merge(self):
        schema = Schema({"name": str})
        taggable(schema, config=TaggableConfig(blacklist=("js",)), blacklist=["express"])
        user = model("User", schema)()
        user.tag("JS", "NODEJS", "express")
        assert user.tags == ["nodejs"]

    def test_blacklist_applies_to_field_tags(self, build_model):
        User = build_model({"name": {"type": str, "taggable": True}}, blacklist=["boe"])
        user = User(name="John Boe")
        user.tag()
        assert user.tags == ["john"]


class TestUntag:
    def test_untag(self, build_model):
        user = build_model()()
        user.tag("js", "nodejs")
        user.untag("js")
        assert user.tags == ["nodejs"]

    def test_untag_is_normalized(self, build_model):
        user = build_model()()
        user.tag("js ninja", "nodejs")
        assert user.untag("JS Ninja") == ["nodejs"]

    def test_untag_ignores_stopword_rules(self, build_model):
        user = build_model()()
        user.tags = ["and", "js"]
        user.untag("and")
        assert user.tags == ["js"]

    def test_untag_on_untagged_record(self, build_model):
        user = build_model()()
        assert user.untag("js") == []


class TestFieldTags:
    def test_collects_tags_from_taggable_paths(self, build_model):
        User = build_model({"name": {"type": str, "taggable": True}})
        user = User(name="John Boe")
        user.tag()
        assert "john" in user.tags
        assert "boe" in user.tags

    def test_collects_tags_from_array_paths(self, build_model):
        User = build_model({"interests": {"type": [str], "taggable": True}})
        user = User(interests=["Cooking", "Talking"])
        user.tag()
        assert "cooking" in user.tags
        assert "talking" in user.tags

    def test_collects_tags_from_nested_array_paths(self, build_model):
        User = build_model({"grid": {"type": list, "taggable": True}})
        user = User(grid=[["Alpha", "Beta"], "Gamma"])
        assert user.tag() == ["alpha", "beta", "gamma"]

    def test_collects_tags_from_map_paths(self, build_model):
        User = build_model({"properties": {"type": dict, "taggable": True}})
        user = User(properties={"given": "John", "surname": "Boe", "age": 30})
        user.tag()
        assert user.tags == ["john", "boe"]

    def test_collects_tags_from_sub_paths(self, build_model):
        User = build_model({
            "name": {
                "given": {"type": str, "taggable": True},
                "surname": {"type": str, "taggable": True},
            },
        })
        user = User(name={"given": "John", "surname": "Boe"})
        user.tag()
        assert user.tags == ["john", "boe"]

    def test_collects_tags_from_subdoc_paths(self, build_model):
        User = build_model({
            "name": Schema({
                "given": {"type": str, "taggable": True},
                "surname": {"type": str, "taggable": True},
            }),
        })
        user = User(name={"given": "John", "surname": "Boe"})
        user.tag()
        assert user.tags == ["john", "boe"]

    def test_collects_tags_from_taggable_subdoc(self, config, build_model):
        address = Schema({"city": {"type": str, "taggable": True}})
        taggable(address, config=config)
        User = build_model({"address": {"type": address, "taggable": True}})
        user = User(address={"city": "Nairobi"})
        user.tag()
        assert user.tags == ["nairobi"]
        assert user.address.tags == ["nairobi"]

    def test_collects_tags_from_array_of_subdocs(self, build_model):
        User = build_model({"addresses": {"type": [dict], "taggable": True}})
        user = User(addresses=[{"city": "Nairobi"}, {"city": "Mombasa"}])
        user.tag()
        assert user.tags == ["nairobi", "mombasa"]

    def test_collects_tags_from_date_paths(self, build_model):
        User = build_model({"dob": {"type": datetime, "taggable": True}})
        user = User(dob=datetime(2000, 1, 1))
        user.tag()
        assert "2000" in user.tags
        assert "january" in user.tags
        assert "saturday" in user.tags

    def test_date_strings_are_coerced(self, build_model):
        User = build_model({"dob": {"type": datetime, "taggable": True}})
        user = User(dob="2000-01-01")
        user.tag()
        assert "saturday" in user.tags

    def test_date_format_from_config(self):
        schema = Schema({"dob": {"type": datetime, "taggable": True}})
        taggable(schema, config=TaggableConfig(date_format="%Y"))
        user = model("User", schema)(dob=datetime(2000, 1, 1))
        assert user.tag() == ["2000"]

    def test_custom_extractor(self, build_model):
        User = build_model({"email": {"type": str, "taggable": lambda value: value.split("@")[0]}})
        user = User(email="john.boe@kilimanjaro.io")
        user.tag()
        assert user.tags == ["john", "boe"]

    def test_failing_extractor_leaves_tags_untouched(self, build_model):
        def broken(value):
            raise RuntimeError("boom")

        User = build_model({"name": {"type": str, "taggable": broken}})
        user = User(name="John Boe", tags=["js"])
        with pytest.raises(RuntimeError):
            user.tag("nodejs")
        assert user.tags == ["js"]

    def test_empty_and_missing_fields_give_no_tags(self, build_model):
        User = build_model({
            "name": {"type": str, "taggable": True},
            "active": {"type": bool, "taggable": True},
        })
        user = User(name="", active=True)
        assert user.tag() == []


class TestReferences:
    @pytest.fixture
    def models(self, config):
        user_schema = Schema({"name": {"type": str, "taggable": True}})
        taggable(user_schema, config=config)
        User = model("User", user_schema)

        post_schema = Schema({
            "title": {"type": str, "taggable": True},
            "author": {"type": ObjectId, "ref": "User", "taggable": True},
        })
        taggable(post_schema, config=config)
        Post = model("Post", post_schema)
        return User, Post

    def test_collects_tags_from_populated_ref(self, models):
        User, Post = models
        author = User(name="John Boe")
        post = Post(title="JS Talks", author=author)
        post.tag()
        assert post.tags == ["js", "talks", "john", "boe"]
        assert author.tags == ["john", "boe"]

    def test_reference_cycle_is_tagged_once(self, build_model):
        User = build_model({
            "name": {"type": str, "taggable": True},
            "friend": {"type": ObjectId, "ref": "User", "taggable": True},
        })
        john = User(name="John Boe")
        friend = User(name="Kilimanjaro")
        john.friend = friend
        friend.friend = john

        assert john.tag() == ["john", "boe", "kilimanjaro"]
        assert friend.tags == ["kilimanjaro"]

    def test_ignores_ref_ids(self, models):
        User, Post = models
        author = User(name="John Boe")
        post = Post(title="JS Talks", author=author.id)
        post.tag()
        assert "john" not in post.tags
        assert "boe" not in post.tags
        assert post.tags == ["js", "talks"]


class TestHook:
    def test_validate_hook_tags(self, build_model):
        User = build_model({"name": {"type": str, "taggable": True}})
        user = User(name="John Boe")
        user.validate()
        assert user.tags == ["john", "boe"]

    def test_hook_keeps_manual_tags(self, build_model):
        User = build_model({"name": {"type": str, "taggable": True}})
        user = User(name="John Boe")
        user.tag("nodejs")
        user.name = "Jane Boe"
        user.validate()
        assert user.tags == ["nodejs", "john", "boe", "jane"]

    def test_fresh_hook_follows_fields(self, build_model):
        User = build_model({"name": {"type": str, "taggable": True}}, fresh=True)
        user = User(name="John Boe")
        user.validate()
        user.name = "Jane Boe"
        user.validate()
        assert user.tags == ["jane", "boe"]

    def test_custom_hook(self, build_model):
        User = build_model({"name": {"type": str, "taggable": True}}, hook="save")
        user = User(name="John Boe")
        user.validate()
        assert user.tags is None
        user.run_hooks("save")
        assert user.tags == ["john", "boe"]

    def test_tags_hidden_by_default(self, build_model):
        user = build_model()()
        user.tag("JS", "NODEJS")
        assert "tags" not in user.to_dict()
        assert user.to_dict(include_hidden=True)["tags"] == ["js", "nodejs"]

    def test_tags_visible_when_not_hidden(self, build_model):
        user = build_model(hide=False)()
        user.tag("JS")
        assert user.to_dict()["tags"] == ["js"]
