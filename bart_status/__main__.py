from .tracker import main

main()
