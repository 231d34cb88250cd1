# External dependencies
import os
import shutil
import tempfile
import unittest

# Internal dependencies
from pathbool import (PathList, rect_path_list, circle_path_list,
                      path_list_drawing, save_path_lists)
from pathbool.drawing import str2colorlist


class TestDrawing(unittest.TestCase):

    def setUp(self):
        self.rect = rect_path_list(0, 0, 100, 100)
        self.circle = circle_path_list(50 + 50j, 20)

    def test_paths(self):
        dwg = path_list_drawing([self.rect, self.circle], colors='rb')
        svg = dwg.tostring()
        self.assertIn(self.rect.d(), svg)
        self.assertIn(self.circle.d(), svg)
        self.assertIn('fill-rule="evenodd"', svg)
        self.assertIn('stroke="red"', svg)
        self.assertIn('stroke="blue"', svg)

    def test_single_path_list(self):
        svg = path_list_drawing(self.rect, fills=['green']).tostring()
        self.assertIn('fill="green"', svg)

    def test_holes_in_one_path(self):
        region = (self.rect + self.circle).normalize()
        svg = path_list_drawing(region).tostring()
        self.assertEqual(svg.count('<path'), 1)

    def test_nodes(self):
        svg = path_list_drawing(self.rect, nodes=[50 + 50j]).tostring()
        self.assertIn('<circle', svg)

    def test_empty_path_lists_keep_their_colors(self):
        svg = path_list_drawing([PathList(), self.rect],
                                colors='rb').tostring()
        self.assertIn('stroke="blue"', svg)

    def test_nothing_to_draw(self):
        self.assertRaises(ValueError, path_list_drawing, [])
        self.assertRaises(ValueError, path_list_drawing, [PathList()])

    def test_color_count(self):
        self.assertRaises(ValueError, path_list_drawing, [self.rect],
                          colors='rb')

    def test_str2colorlist(self):
        self.assertEqual(str2colorlist('rgb'), ['red', 'green', 'blue'])
        self.assertEqual(str2colorlist('?', 'black'), ['black'])


class TestSave(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_save(self):
        filename = os.path.join(self.tmpdir, 'nested', 'square.svg')
        rect = rect_path_list(0, 0, 100, 100)
        self.assertEqual(save_path_lists([rect], filename), filename)
        with open(filename) as f:
            content = f.read()
        self.assertIn(rect.d(), content)
        self.assertIn('<svg', content)


if __name__ == '__main__':
    unittest.main()
