from bst_tree import BstTree

SAMPLE_VALUES = [1, 7, 4, 23, 8, 9, 4, 3, 5, 7, 9, 67, 95, 28]
# large enough to pile up on the right edge of the sample tree
UNBALANCING_VALUES = (555, 665, 777, 999)


def print_traversals(tree: BstTree):
    for name, traversal in (
        ('Level order', tree.level_order_for_each),
        ('In order', tree.in_order_for_each),
        ('Pre order', tree.pre_order_for_each),
        ('Post order', tree.post_order_for_each),
    ):
        print(f'{name} traversal: {tree.get_traversal_order(traversal)}')


def main(max_width=None):
    """Build the sample tree, unbalance it, rebalance it, and print the tree along the way."""
    tree: BstTree[int] = BstTree(SAMPLE_VALUES)
    print(f'Is tree balanced? expected: True, actual: {tree.is_balanced()}')
    tree.pretty_print(max_width)
    print_traversals(tree)

    print('Unbalancing tree...')
    for val in UNBALANCING_VALUES:
        tree.insert(val)
    print(f'Is tree balanced? expected: False, actual: {tree.is_balanced()}')
    tree.pretty_print(max_width)

    print('Rebalancing tree...')
    tree.rebalance()
    print(f'Is tree balanced? expected: True, actual: {tree.is_balanced()}')
    tree.pretty_print(max_width)
    print_traversals(tree)
    return tree


if __name__ == '__main__':
    main()
