from .compile import handle_compile, output_path_for, _compile_single_file, _print_batch_summary
from .scan import handle_scan
