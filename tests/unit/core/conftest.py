"""Shared block markup samples for core unit tests"""

import pytest


SAMPLE_POST = """\
<!-- wp:paragraph -->
<p>Intro text.</p>
<!-- /wp:paragraph -->

<!-- wp:columns -->
<div class="wp-block-columns"><!-- wp:column -->
<div class="wp-block-column"><!-- wp:dmg/read-more {"postId":42,"postTitle":"Next"} /--></div>
<!-- /wp:column --></div>
<!-- /wp:columns -->
"""


@pytest.fixture(name="sample_post")
def sample_post_fixture():
    return SAMPLE_POST
