# graphviz-studio

An interactive graph editor drawn with pygame. Place nodes, connect them,
drag them around, and watch a force-directed layout settle the graph. A
side panel steps through minimum spanning tree algorithms (Kruskal and
Borůvka) one move at a time, colouring nodes and highlighting the edges
chosen so far.

## Installation

```
pip install .
```

## Running

```
graphviz-studio
```

By default the editor opens full screen at the size of the desktop.
Options:

- `--windowed` opens an ordinary window instead of full screen.
- `--size WIDTHxHEIGHT` sets the window size, for example `--size 1280x720`.

At start-up the editor looks for a `resources` directory in the current
working directory, or failing that in its parent, and loads
`resources/input.txt` from it if that file exists.

### Controls

| Input                 | Action                                          |
|-----------------------|-------------------------------------------------|
| Left click on empty   | Add a node                                      |
| Left click on a node  | Select it; click a second node to join them     |
| Drag a node           | Move it                                         |
| Middle drag           | Pan the view                                    |
| Mouse wheel           | Zoom around the pointer                         |
| `Delete`              | Delete the selected node                        |
| `R`                   | Fit the view to the graph                       |
| `G`                   | Toggle the background grid animation            |
| `Ctrl+S`              | Save to `resources/output.txt` in the current directory |
| `Ctrl+L`              | Load `resources/input.txt`                      |
| `Ctrl+A`              | Show or hide the algorithm panel                |
| `Esc`                 | Quit                                            |

The buttons at the top left switch the graph between directed and
undirected mode and between unordered and ordered listing. While a node is
selected, a panel slides in on the right listing its connections.

The algorithm panel loads `resources/Kruskal_input.txt` or
`resources/Boruvka_input.txt` when an algorithm is chosen, and offers
*Step*, *Reset* and *Run Animation* (one step per second).

## Graph file format

The first line gives the number of nodes; the nodes get ids `0 .. n-1` and
are placed at random positions. Each following line starts with a source id
and lists its targets, each optionally followed by `:weight`:

```
4
0 1:2.5 2:1.0
1 3:4.0
2 3:0.5
```

## Library use

The algorithms can be driven without a window:

```python
from graphviz_studio.mst import KruskalMST

algo = KruskalMST()
algo.add_edge(0, 1, 2.5)
algo.add_edge(0, 2, 1.0)
algo.add_edge(1, 2, 3.0)
algo.execute(range(3))
while not algo.finished:
    algo.step()
print([(e.src, e.dest) for e in algo.mst_edges])  # [(0, 2), (0, 1)]
```

Each step also records a numbered description
(`current_step_description()`) and per-node display state
(`get_node_state(node_id)`). `BoruvkaMST` works the same way, and its
`step()` returns `False` once it has finished.

Other modules:

- `graphviz_studio.graph_io` reads and writes the text format
  (`read_graph`, `write_graph`, `load_from_file`, `save_to_file`,
  `find_resources_dir`).
- `graphviz_studio.map_loader.load_from_xml(graph, filename, window_size)`
  builds a graph from a `<map>` XML file of `node` elements (`id`,
  `latitude`, `longitude`) and `arc` elements (`from`, `to`, `length`),
  scaled to fit the window. `parse_map` reads such a file on its own.
- `graphviz_studio.coordinates` holds `Coordinates`, `find_bounds` and
  `parse_node_file`, which returns three fixed sample nodes without reading
  the file.
- `graphviz_studio.mst_panel.MSTPanel` is a simpler panel that steps an
  algorithm over whatever graph it is given.

## What it does not do

- The editor has no control for loading XML maps; `load_from_xml` is
  available only from code.
- There is no shortest-path search. `graph_algorithm.Dijkstra` searches
  nothing and reports itself finished at once, and
  `graph_algorithm.MinimumSpanningTree` only counts through `n - 1` steps.
- Node positions are not stored in the graph file; loading places nodes at
  random.

## Tests

```
pip install .[test]
pytest
```