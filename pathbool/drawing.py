"""This submodule: tools for rendering PathLists (e.g. the results of a
boolean operation) to SVG, mostly to look at what went wrong."""

# External dependencies:
from math import ceil
from os import path as os_path, makedirs
from xml.dom.minidom import parse as md_xml_parse
from svgwrite import Drawing
from warnings import warn

# Internal dependencies
from .pathlist import PathList
from .bezier import big_bounding_box

# color shorthand for inputting color list as string of chars.
color_dict = {'a': 'aqua',
              'b': 'blue',
              'c': 'cyan',
              'd': 'darkblue',
              'g': 'green',
              'k': 'black',
              'l': 'lime',
              'm': 'magenta',
              'n': 'brown',
              'o': 'orange',
              'p': 'pink',
              'r': 'red',
              's': 'salmon',
              't': 'tan',
              'u': 'purple',
              'v': 'violet',
              'y': 'yellow'}


def str2colorlist(s, default_color=None):
    return [color_dict.get(ch, default_color) for ch in s]


def _colors(colors, n, default):
    if not colors:
        return [default]*n
    if len(colors) != n:
        raise ValueError("Expected {} colors, got {}.".format(n, len(colors)))
    if isinstance(colors, str):
        return str2colorlist(colors, default_color=default)
    return ["rgb" + str(c) if isinstance(c, tuple) and len(c) == 3 else c
            for c in colors]


def path_list_drawing(path_lists, colors=None, fills=None, filename=None,
                      stroke_widths=None, nodes=None, node_colors=None,
                      node_radii=None, margin_size=0.1, mindim=600,
                      attributes=None, svgwrite_debug=False):
    """Creates an svgwrite Drawing showing the given PathLists.

    Each PathList becomes one <path> element (with fill-rule evenodd, so
    holes show as holes).

    Args:
        path_lists: a PathList or a list of them (e.g. what
            apply_boolean_operation() returns)
        colors: stroke colors, a list or a string of single character
            colors (see `color_dict`); black by default
        fills: fill colors; 'none' by default
        filename: file name stored in the Drawing, used by save()
        stroke_widths: defaults to 0.1% of the larger dimension
        nodes: points to draw as small filled circles
        node_colors, node_radii: as for the paths, red and 0.5% by default
        margin_size: margin around the contents, relative to their size
        mindim: size of the smaller output dimension, in px
        attributes: a list of dictionaries of extra attributes, one per
            PathList.  Attributes svgwrite rejects are dropped with a
            warning.
        svgwrite_debug: turns on svgwrite's attribute validation

    Returns:
        svgwrite.Drawing
    """
    _default_relative_node_radius = 5e-3
    _default_relative_stroke_width = 1e-3
    _default_path_color = '#000000'  # black
    _default_node_color = '#ff0000'  # red

    if isinstance(path_lists, PathList):
        path_lists = [path_lists]
    path_lists = list(path_lists)
    nodes = list(nodes or [])

    colors = _colors(colors, len(path_lists), _default_path_color)
    fills = _colors(fills, len(path_lists), 'none')
    node_colors = _colors(node_colors, len(nodes), _default_node_color)

    boxes = [pl.bbox() for pl in path_lists if pl.segments()]
    boxes += [(z.real, z.real, z.imag, z.imag) for z in nodes]
    if not boxes:
        raise ValueError("Nothing to draw.")
    xmin, xmax, ymin, ymax = big_bounding_box(boxes)
    dx = xmax - xmin or 1
    dy = ymax - ymin or 1

    if not stroke_widths:
        stroke_widths = [max(dx, dy)*_default_relative_stroke_width] * \
            len(path_lists)
    elif len(stroke_widths) != len(path_lists):
        raise ValueError("Expected one stroke width per PathList.")
    if not node_radii:
        node_radii = [max(dx, dy)*_default_relative_node_radius]*len(nodes)
    elif len(node_radii) != len(nodes):
        raise ValueError("Expected one radius per node.")

    max_stroke_width = max(stroke_widths, default=0)
    max_node_diameter = 2*max(node_radii, default=0)
    extra_space_for_style = max(max_stroke_width, max_node_diameter)
    xmin -= margin_size*dx + extra_space_for_style/2
    ymin -= margin_size*dy + extra_space_for_style/2
    dx += 2*margin_size*dx + extra_space_for_style
    dy += 2*margin_size*dy + extra_space_for_style
    viewbox = "%s %s %s %s" % (xmin, ymin, dx, dy)

    if dx > dy:
        dimensions = ('%spx' % mindim, '%spx' % int(ceil(mindim*dy/dx)))
    else:
        dimensions = ('%spx' % int(ceil(mindim*dx/dy)), '%spx' % mindim)

    dwg = Drawing(filename=filename or 'path_lists.svg', size=dimensions,
                  debug=svgwrite_debug, viewBox=viewbox)

    for i, pl in enumerate(path_lists):
        good_attribs = {'d': pl.d(),
                        'stroke': colors[i],
                        'stroke_width': str(stroke_widths[i]),
                        'fill': fills[i],
                        'fill_rule': 'evenodd'}
        if attributes:
            for key, val in attributes[i].items():
                if key == 'd':
                    continue
                try:
                    dwg.path(pl.d(), **{key: val})
                    good_attribs[key] = val
                except (TypeError, ValueError) as e:
                    warn(str(e))
        dwg.add(dwg.path(**good_attribs))

    for i, z in enumerate(nodes):
        dwg.add(dwg.circle((z.real, z.imag), node_radii[i],
                           fill=node_colors[i]))
    return dwg


def save_path_lists(path_lists, filename, pretty=True, **kwargs):
    """Renders the PathLists with path_list_drawing() and writes the SVG to
    `filename`, creating its directory if needed.  Returns `filename`."""
    dwg = path_list_drawing(path_lists, filename=filename, **kwargs)

    dirname = os_path.dirname(filename)
    if dirname and not os_path.exists(dirname):
        makedirs(dirname)
    dwg.save()

    # re-open the svg, make the xml pretty, and save it again
    if pretty:
        xmlstring = md_xml_parse(filename).toprettyxml()
        with open(filename, 'w') as f:
            f.write(xmlstring)
    return filename
