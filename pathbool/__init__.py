from .bezier import (bezier_point, bezier2polynomial, split_bezier,
                     bezier_bounding_box, bezier_intersections,
                     bezier_by_line_intersections)
from .path import (Path, Line, CubicBezier, quadratic_bezier, Intersection,
                   PathIntersection, Projection, PathProjection,
                   is_path_segment, concatpaths, polygon,
                   transform)
from .pathlist import PathList, split_disjoint
from .builder import PathListBuilder, rect_path_list, circle_path_list
from .clip import apply_boolean_operation, BOOLEAN_OPERATIONS
from .drawing import path_list_drawing, save_path_lists
from .polytools import quadratic_roots, cubic_roots, real, imag
from .misctools import (PathboolError, InvariantError, ContainmentCycleError,
                        ContractError)
