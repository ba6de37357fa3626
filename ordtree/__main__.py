from ordtree.demo import main

main()
