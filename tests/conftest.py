from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.source_builder import SourceBuilder


@pytest.fixture
def source_builder(tmp_path: Path) -> SourceBuilder:
    """Provide a source tree builder rooted at the pytest tmp_path."""
    return SourceBuilder(tmp_path)


CALCULATOR_SOURCE = """\
package com.example.math;

import java.util.List;
import java.util.Map;

/**
 * A simple calculator.
 * Keeps a running total.
 */
public class Calculator {

    private int total;

    /**
     * Creates a calculator.
     * @param seed the starting total
     */
    public Calculator(int seed) {
        this.total = seed;
    }

    /**
     * Adds two numbers.
     * @param b the second operand
     * @param a the first operand
     * @return the sum
     */
    public int add(int a, int b) {
        return a + b;
    }

    /** Clears the total. */
    @Override
    protected void reset() {
        total = 0;
    }

    static <T> List<T> wrap(T value, Map<String, List<Integer>> index) {
        return null;
    }
}
"""


@pytest.fixture
def calculator_source() -> str:
    return CALCULATOR_SOURCE
