from setup_cmake.cli.app import main

main()
