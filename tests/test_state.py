"""
Tests for the structural state threaded through a formatting run.
"""

from cobol_formatter.core.state import BlockFrame, StructuralState


def depths(levels):
    state = StructuralState()
    return [state.push_level(level) for level in levels]


class TestNestingStack:
    """Tests for the level push/pop rule."""

    def test_record_hierarchy(self):
        assert depths([1, 5, 10, 5, 1]) == [0, 1, 2, 1, 0]

    def test_lower_level_pops_deeper_entries(self):
        assert depths([1, 5, 10, 15, 3]) == [0, 1, 2, 3, 1]

    def test_condition_name_nests_under_owner(self):
        assert depths([1, 5, 88]) == [0, 1, 2]

    def test_condition_names_are_siblings(self):
        assert depths([1, 5, 88, 88]) == [0, 1, 2, 2]

    def test_independent_items_reset(self):
        assert depths([1, 5, 77, 77]) == [0, 1, 0, 0]

    def test_renames_and_constants_reset(self):
        assert depths([1, 5, 66]) == [0, 1, 0]
        assert depths([1, 5, 78]) == [0, 1, 0]

    def test_first_item_without_record(self):
        assert depths([5, 10]) == [0, 1]

    def test_stack_contents(self):
        state = StructuralState()
        for level in [1, 5, 10, 5]:
            state.push_level(level)
        assert state.nesting_stack == [1, 5]


class TestControlState:
    """Tests for block frames and sentence ends."""

    def test_end_sentence_returns_to_base(self):
        state = StructuralState(control_indent_level=3)
        state.block_frames.append(BlockFrame("IF", 0))
        state.end_sentence()
        assert state.control_indent_level == 0
        assert state.block_frames == []

    def test_reset_control(self):
        state = StructuralState(control_indent_level=2, paragraph_base_indent=1)
        state.block_frames.append(BlockFrame("EVALUATE", 1))
        state.reset_control()
        assert state.control_indent_level == 0
        assert state.paragraph_base_indent == 0
        assert not state.in_evaluate_block

    def test_innermost_block(self):
        state = StructuralState()
        assert state.innermost_block is None
        state.block_frames.append(BlockFrame("EVALUATE", 0))
        state.block_frames.append(BlockFrame("IF", 1))
        assert state.innermost_block.keyword == "IF"
        assert state.in_evaluate_block

    def test_first_branch_tracking(self):
        state = StructuralState()
        assert state.is_first_branch_in_block
        state.block_frames.append(BlockFrame("EVALUATE", 0))
        assert state.is_first_branch_in_block
        state.innermost_block.branch_seen = True
        assert not state.is_first_branch_in_block


class TestRegions:
    """Tests for region flag updates from header lines."""

    def test_data_division(self):
        state = StructuralState(nesting_stack=[1, 5])
        state.update_regions("DATA DIVISION.")
        assert state.in_data_division
        assert not state.in_procedure_division
        assert state.nesting_stack == []

    def test_working_storage(self):
        state = StructuralState()
        state.update_regions("DATA DIVISION.")
        state.update_regions("WORKING-STORAGE SECTION.")
        assert state.in_working_storage
        assert state.in_data_subregion

    def test_local_storage_counts_as_working_storage(self):
        state = StructuralState()
        state.update_regions("DATA DIVISION.")
        state.update_regions("LOCAL-STORAGE SECTION.")
        assert state.in_working_storage

    def test_subregions_are_exclusive(self):
        state = StructuralState()
        state.update_regions("DATA DIVISION.")
        state.update_regions("FILE SECTION.")
        assert state.in_file_section
        state.update_regions("LINKAGE SECTION.")
        assert state.in_linkage_section
        assert not state.in_file_section
        assert not state.in_working_storage

    def test_screen_section_is_not_a_data_subregion(self):
        state = StructuralState()
        state.update_regions("DATA DIVISION.")
        state.update_regions("WORKING-STORAGE SECTION.")
        state.update_regions("SCREEN SECTION.")
        assert not state.in_data_subregion

    def test_section_outside_data_division(self):
        state = StructuralState()
        state.update_regions("WORKING-STORAGE SECTION.")
        assert not state.in_data_subregion

    def test_procedure_division(self):
        state = StructuralState(last_decl_text_column=14)
        state.update_regions("DATA DIVISION.")
        state.update_regions("WORKING-STORAGE SECTION.")
        state.update_regions("PROCEDURE DIVISION USING LK-AREA.")
        assert state.in_procedure_division
        assert not state.in_data_division
        assert not state.in_data_subregion
        assert state.last_decl_text_column == 0

    def test_ordinary_line_keeps_regions(self):
        state = StructuralState()
        state.update_regions("DATA DIVISION.")
        state.update_regions("WORKING-STORAGE SECTION.")
        state.update_regions("01 WS-REC.")
        assert state.in_working_storage
