"""Shared test fixtures for the seamcarve test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.grid import Grid


def make_random_image(W, H, seed=0):
    """Random RGB pixel grid."""
    gen = torch.Generator().manual_seed(seed)
    pixels = torch.randint(0, 256, (H, W, 3), generator=gen, dtype=torch.uint8)
    return Grid.from_tensor(pixels)


def make_split_image(W, H, split):
    """Black left of column `split`, white from it onward."""
    pixels = torch.zeros(H, W, 3, dtype=torch.uint8)
    pixels[:, split:] = 255
    return Grid.from_tensor(pixels)


def make_uniform_image(W, H, color=(120, 60, 200)):
    pixels = torch.tensor(color, dtype=torch.uint8).expand(H, W, 3).clone()
    return Grid.from_tensor(pixels)


def random_connected_seam(W, H, seed=0):
    """Random seam whose columns move by at most one per row."""
    gen = torch.Generator().manual_seed(seed)
    seam = [int(torch.randint(0, W, (1,), generator=gen))]
    for _ in range(H - 1):
        step = int(torch.randint(-1, 2, (1,), generator=gen))
        seam.append(min(max(seam[-1] + step, 0), W - 1))
    return seam


@pytest.fixture
def seam_test_image():
    """6x5 image with a known minimum seam of [3, 4, 3, 2, 2]."""
    rows = [
        [(78, 209, 79), (63, 118, 247), (92, 175, 95),
         (243, 73, 183), (210, 109, 104), (252, 101, 119)],
        [(224, 191, 182), (108, 89, 82), (80, 196, 230),
         (112, 156, 180), (176, 178, 120), (142, 151, 142)],
        [(117, 189, 149), (171, 231, 153), (149, 164, 168),
         (107, 119, 71), (120, 105, 138), (163, 174, 196)],
        [(163, 222, 132), (187, 117, 183), (92, 145, 69),
         (158, 143, 79), (220, 75, 222), (189, 73, 214)],
        [(211, 120, 173), (188, 218, 244), (214, 103, 68),
         (163, 166, 246), (79, 125, 246), (211, 201, 98)],
    ]
    return Grid.from_tensor(torch.tensor(rows, dtype=torch.uint8))


@pytest.fixture
def gradient_image():
    """3x4 image from which energy values are known exactly."""
    rows = [
        [(255, 101, 51), (255, 101, 153), (255, 101, 255)],
        [(255, 153, 51), (255, 153, 153), (255, 153, 255)],
        [(255, 203, 51), (255, 204, 153), (255, 205, 255)],
        [(255, 255, 51), (255, 255, 153), (255, 255, 255)],
    ]
    return Grid.from_tensor(torch.tensor(rows, dtype=torch.uint8))
