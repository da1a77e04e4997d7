# mdview

Multidimensional views over flat Python sequences. You describe the shape
with extents, choose how indices are laid out in the storage, and index
the view with tuples. Sub-views are taken with `submdspan`. The package
also has a few plain kernels that run over views: random fill, copies,
3-D box stencils and matrix-vector products.

The package has no runtime dependencies.

```
pip install .
pip install .[test]   # adds pytest
pytest
```

## Quick look

```python
from mdview.extents import DYNAMIC_EXTENT, Extents, dextents
from mdview.mapping import Layout, Mapping
from mdview.slices import FULL_EXTENT, Constant, submdspan_extents
from mdview.view import MDSpan, submdspan

data = list(range(12))
view = MDSpan(data, dextents(2, 3, 4))    # 3 x 4, row-major
view[1, 2]                                # 6
view[1, 2] = 60                           # writes data[6]

row = submdspan(view, 1, FULL_EXTENT)     # keeps the row-major layout
row.extent(0), row[0]                     # (4, 4)

col = submdspan(view, FULL_EXTENT, 2)     # falls back to a stride layout
col.mapping.layout, col.mapping.strides() # (Layout.STRIDE, (4,))
col[2]                                    # 10

m = Mapping(dextents(2, 16, 32), Layout.STRIDE, (1, 128))
m.required_span_size(), m.is_exhaustive() # (3984, False)

ext = Extents((3, DYNAMIC_EXTENT, 5), 4)
sub = submdspan_extents(ext, FULL_EXTENT, (Constant(1), Constant(3)), FULL_EXTENT)
sub.static_extents                        # (3, 2, 5)
```

## Extents (`mdview.extents`)

`Extents(static_extents, *values)` takes one entry per dimension: a
non-negative integer for a size fixed up front, or `DYNAMIC_EXTENT`
(`None`) for a size given at construction. The values are either the
dynamic sizes only or all sizes, passed separately or as one sequence.
Another `Extents` of the same rank with compatible static sizes may be
passed instead, to convert from it. With no values, dynamic sizes are
zero. All sizes given for static dimensions must match them, or
`ValueError` is raised.

- `rank()`, `rank_dynamic()`
- `extent(r)`: the size of dimension `r`
- `static_extent(r)`: the fixed size, or `DYNAMIC_EXTENT`
- `static_extents`: the whole static description
- iteration yields every size; two extents are equal when they have the
  same rank and the same sizes.

`dextents(rank, *values)` builds extents with every dimension dynamic.

## Data handles and accessors (`mdview.accessor`)

A `DataHandle` is a buffer plus an offset into it. Adding an integer
moves the offset, indexing reads and writes the buffer relative to it,
and two handles are equal when they refer to the same buffer object at
the same offset. A handle without a buffer is null and cannot be
dereferenced.

`DefaultAccessor` has `offset(p, i)` (the handle `i` elements past `p`)
and `access(p, i)` (the element there).

## Mappings (`mdview.mapping`)

`Mapping(extents, layout=Layout.RIGHT, strides=None)` turns a
multi-index into a storage offset. `Layout` is one of:

- `Layout.LEFT`: column-major, the first index varies fastest;
- `Layout.RIGHT`: row-major, the last index varies fastest;
- `Layout.STRIDE`: one explicit non-negative stride per dimension,
  required in `strides`.

The layout may also be given as `"left"`, `"right"` or `"stride"`.

- `mapping(*indices)`: the offset of an element; indices out of range
  raise `IndexError`
- `stride(r)`, `strides()`
- `required_span_size()`: the number of storage elements the mapping can
  reach (zero if any size is zero)
- `is_exhaustive()`: always true for left and right layouts; for a
  stride layout, whether the span size equals the number of elements
- `extents`, `layout`

Mappings compare equal when their extents and strides match; a left and
a right mapping are never equal.

`submdspan_mapping(mapping, *slices)` returns a `MappingOffset` holding
the sub-mapping and the storage offset of its first element. A left or
right layout is kept when the selection stays contiguous in it;
otherwise the result has a stride layout.

## Slices (`mdview.slices`)

One slice specifier per dimension:

- an integer: selects one index and removes the dimension;
- a `(begin, end)` tuple: the half-open range;
- `FULL_EXTENT` (an instance of `FullExtent`): the whole dimension;
- `StridedSlice(offset, extent, stride)`: indices `offset`,
  `offset + stride`, ... spanning `extent` indices.

Bounds given as `Constant` keep the resulting size static; otherwise it
is dynamic. `first_of`, `last_of`, `stride_of` and
`submdspan_extents(extents, *slices)` expose the extent calculation on
its own.

## Views (`mdview.view`)

`MDSpan(data, mapping, accessor=None)` takes a `DataHandle`, a mutable
sequence (viewed from its start) or `None`, and a `Mapping` or an
`Extents` (laid out row-major). It offers `view[i, j]` reads and writes,
`extent(r)`, `rank()`, `rank_dynamic()`, `size()`, and the properties
`data_handle`, `mapping`, `accessor` and `extents`.

- `submdspan(src, *slices)`: the sub-view selected by the slices.
- `swap(a, b)`: exchanges the data handles, mappings and accessors of
  two views.

## Kernels

- `mdview.fill.fill_random(view, seed=1234)`: fills every element with
  an integer in `[0, 127]` from `random.Random(seed)`, visiting indices
  last-index fastest, so views of the same extents get the same logical
  values whatever their layout.
- `mdview.copy`: `copy_2d(src, dest)` between rank-2 views;
  `raw_copy_1d(src, dest, size)` and `raw_copy_2d(src, dest, x, y)`
  between flat sequences; `copy_bytes(count, itemsize, iterations)`.
- `mdview.stencil`: `stencil_3d(s, o, delta=1)` writes to each interior
  element of `o` the sum of its box neighbourhood in `s`;
  `stencil_3d_raw_right` and `stencil_3d_raw_left` do the same over flat
  row-major and column-major buffers of size `x`, `y`, `z`;
  `first_touch_3d(view)` zeroes a rank-3 view;
  `stencil_bytes(x, y, z, delta, itemsize, iterations)`.
- `mdview.matvec`: `matvec(a, x, y)` stores `a · x` in `y`;
  `matvec_accumulate(a, x, y, repeats=10)` adds it `repeats` times;
  `matvec_raw_left` and `matvec_raw_right` work on flat column-major and
  row-major matrices of `n` rows and `m` columns; `first_touch(view)`
  zeroes a view; `matvec_bytes(n, m, itemsize, repeats, iterations)`.

The byte-count helpers only compute a number; they measure nothing.

## What it does not do

The kernels are plain, single-threaded Python loops. The package has no
timing or benchmark runner and no command-line program, and it owns no
storage: views always refer to a sequence you provide.