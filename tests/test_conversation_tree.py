"""
Conversation tree construction tests.
"""
from ConversationTree import build_conversation_tree


class TestBuildConversationTree:
    """Test how flat posts are grouped into a reply hierarchy."""

    def test_original_post_only(self, make_post):
        """A thread with only post #1 has no comments at all."""
        tree = build_conversation_tree([make_post(1)])

        assert tree.top_level_posts == []
        assert tree.children_map == {}
        assert tree.post_map[1].post_number == 1

    def test_reply_to_original_post(self, make_post):
        """A reply to post #1 is a child of #1, not a top-level post."""
        op, reply = make_post(1), make_post(2, reply_to=1)
        tree = build_conversation_tree([op, reply])

        assert tree.children_map[1] == [reply]
        assert tree.top_level_posts == []

    def test_posts_without_reply_target_are_top_level(self, make_post):
        """Posts with no reply target (other than #1) are top-level and in no children list."""
        posts = [make_post(1), make_post(2), make_post(3), make_post(4, reply_to=2)]
        tree = build_conversation_tree(posts)

        assert [p.post_number for p in tree.top_level_posts] == [2, 3]
        for children in tree.children_map.values():
            assert all(child.reply_to_post_number for child in children)

    def test_ordering_ignores_input_order_and_ids(self, make_post):
        """Children and top-level lists are sorted by post_number, not by input order or id."""
        posts = [
            make_post(7, reply_to=2, id=1),
            make_post(3, id=99),
            make_post(5, reply_to=2, id=50),
            make_post(1),
            make_post(2, id=5),
            make_post(6, reply_to=2, id=2),
        ]
        tree = build_conversation_tree(posts)

        assert [p.post_number for p in tree.top_level_posts] == [2, 3]
        assert [p.post_number for p in tree.children_map[2]] == [5, 6, 7]

    def test_dangling_reply_target_is_kept_but_unreachable(self, make_post):
        """A reply to a missing post stays in post_map but is not top-level."""
        orphan = make_post(9, reply_to=8)
        tree = build_conversation_tree([make_post(1), orphan])

        assert tree.post_map[9] == orphan
        assert orphan not in tree.top_level_posts
        assert 8 not in tree.post_map
        assert tree.children_map[8] == [orphan]

    def test_every_post_placed_exactly_once(self, make_post):
        """Each post is either #1, in one children list, or top-level."""
        posts = [make_post(1), make_post(2), make_post(3, reply_to=2), make_post(4, reply_to=3), make_post(5, reply_to=1)]
        tree = build_conversation_tree(posts)

        placed = [p.post_number for p in tree.top_level_posts]
        for children in tree.children_map.values():
            placed.extend(p.post_number for p in children)
        assert sorted(placed) == [2, 3, 4, 5]
