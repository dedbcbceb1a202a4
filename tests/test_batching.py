"""Unit tests for chunking."""
import math

import pytest

from asset_prefetch.downloader import chunked


class TestChunked:
    """Tests for chunked function."""

    @pytest.mark.parametrize('n,size', [(0, 5), (1, 5), (5, 5), (6, 5), (12, 5), (7, 1), (3, 10)])
    def test_chunk_count_and_sizes(self, n, size):
        """Test ceil(n/size) chunks, all full except possibly the last."""
        chunks = list(chunked(list(range(n)), size))

        assert len(chunks) == math.ceil(n / size)
        for chunk in chunks[:-1]:
            assert len(chunk) == size
        if chunks:
            assert 1 <= len(chunks[-1]) <= size

    def test_order_preserved(self):
        """Test input order survives chunk boundaries."""
        items = list('abcdefg')
        chunks = list(chunked(items, 3))

        assert chunks == [['a', 'b', 'c'], ['d', 'e', 'f'], ['g']]
        assert [x for chunk in chunks for x in chunk] == items

    @pytest.mark.parametrize('size', [0, -1])
    def test_invalid_size(self, size):
        """Test non-positive sizes are rejected."""
        with pytest.raises(ValueError):
            list(chunked([1, 2], size))
