from taperscope.cli import main

main(prog_name="taperscope")
